from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional, Union
from uuid import UUID

import structlog

from app.engine.errors import EngineError
from app.engine.periods import coerce_month
from app.engine.strategies.accrual import AccrueToNow
from app.engine.strategies.base import AccrualStrategy

log = structlog.get_logger(__name__)

MonthValue = Union[date, datetime, str]


@dataclass(frozen=True)
class SubscriptionRecord:
    """
    Read-only snapshot of a stored subscription, as handed to the cost engine.
    Dates are parsed per record at aggregation time.
    """
    id: Any
    service_name: str
    price: int
    user_id: Optional[UUID]
    start_date: MonthValue
    end_date: Optional[MonthValue] = None

    @classmethod
    def from_row(cls, row: Any) -> "SubscriptionRecord":
        return cls(
            id=row.id,
            service_name=row.service_name,
            price=row.price,
            user_id=row.user_id,
            start_date=row.start_date,
            end_date=row.end_date,
        )


def months_inclusive(start: date, end: date) -> int:
    # calendar months touched by [start, end]; day of month is ignored
    return (end.year - start.year) * 12 + (end.month - start.month) + 1


def record_cost(
    record: SubscriptionRecord,
    period_start: date,
    period_end: date,
    *,
    open_cutoff: date,
) -> int:
    """
    Amount `record` accrues inside [period_start, period_end].
    Raises EngineError when the record itself is unreadable.
    """
    if not isinstance(record.price, int) or record.price < 0:
        raise EngineError(f"price must be a non-negative integer, got {record.price!r}")

    start = coerce_month(record.start_date)
    end = coerce_month(record.end_date) if record.end_date is not None else open_cutoff

    effective_start = max(start, period_start)
    effective_end = min(end, period_end)
    if effective_start > effective_end:
        return 0

    months = max(months_inclusive(effective_start, effective_end), 1)
    return record.price * months


def compute_total_cost(
    records: Iterable[SubscriptionRecord],
    period_start: date,
    period_end: date,
    now: Optional[date] = None,
    accrual: Optional[AccrualStrategy] = None,
) -> int:
    """
    Total paid across `records` over [period_start, period_end], billed in
    whole calendar months.

    Open-ended records accrue up to the cutoff chosen by `accrual`
    (default: `now`, i.e. today in UTC). Records with unreadable dates are
    skipped and logged; the rest are still summed.
    """
    if now is None:
        now = datetime.now(tz=timezone.utc).date()
    accrual = accrual or AccrueToNow()
    open_cutoff = accrual.cutoff(now=now, period_end=period_end)

    total = 0
    for record in records:
        try:
            total += record_cost(record, period_start, period_end, open_cutoff=open_cutoff)
        except EngineError as e:
            log.warning(
                "subscription_record_skipped",
                subscription_id=record.id,
                service_name=record.service_name,
                error=str(e),
            )
    return total
