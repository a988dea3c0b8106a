from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import date

# ---------- Accrual ----------

class AccrualStrategy(ABC):
    @abstractmethod
    def cutoff(self, *, now: date, period_end: date) -> date:
        """
        Last date an open-ended subscription (no end month) accrues cost to.
        The query window still bounds the result afterwards.
        """
        raise NotImplementedError
