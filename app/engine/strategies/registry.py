from __future__ import annotations
from typing import Dict, Optional, Type
from app.engine.strategies.base import AccrualStrategy
from app.engine.strategies.accrual import AccrueToNow, AccrueToPeriodEnd

ACCRUAL: Dict[str, Type[AccrualStrategy]] = {
    "now": AccrueToNow,
    "period-end": AccrueToPeriodEnd,
    "period_end": AccrueToPeriodEnd,     # alias
}

def _build_or_default(mapping, key: Optional[str], default_cls):
    cls = mapping.get(key) or default_cls
    return cls()

def build_accrual(key: Optional[str]) -> AccrualStrategy:
    """
    Falls back to AccrueToNow for missing or unknown keys.
    """
    return _build_or_default(ACCRUAL, (key or "").strip().lower(), AccrueToNow)
