from __future__ import annotations
from datetime import date
from app.engine.strategies.base import AccrualStrategy

class AccrueToNow(AccrualStrategy):
    """
    Open subscriptions keep running up to the evaluation instant, never into
    future months even when the window reaches past today.
    """
    def cutoff(self, *, now: date, period_end: date) -> date:
        return now

class AccrueToPeriodEnd(AccrualStrategy):
    """
    Open subscriptions are billed through the end of the window (projection).
    """
    def cutoff(self, *, now: date, period_end: date) -> date:
        return period_end
