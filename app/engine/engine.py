from __future__ import annotations
from typing import Callable, Dict, Any, List, Optional
from uuid import UUID
from datetime import date

import structlog

from app.engine.cost import SubscriptionRecord, compute_total_cost
from app.engine.errors import EngineError, InvalidDateFormat, SubscriptionNotFound
from app.engine.periods import format_month, normalize_window, parse_month
from app.engine.strategies.accrual import AccrueToNow
from app.engine.strategies.base import AccrualStrategy
from app.persistence.models import Subscription
from app.persistence.repo import SubscriptionRepo
from app.schemas.api_models import SubscriptionCreate, SubscriptionResponse

__all__ = [
    "SubscriptionEngine",
    "EngineError",
    "InvalidDateFormat",
    "SubscriptionNotFound",
]

log = structlog.get_logger(__name__)


class SubscriptionEngine:
    """
    Subscription CRUD plus the total-cost query.

    The record store (`repo`) and the clock are injected; the engine never
    commits, the caller owns the transaction.
    """

    def __init__(
        self,
        repo: SubscriptionRepo,
        clock: Callable[[], date],
        accrual: Optional[AccrualStrategy] = None,
    ):
        self.repo = repo
        self.clock = clock
        self.accrual = accrual or AccrueToNow()

    # ---------------- input conversion ----------------

    @staticmethod
    def _to_fields(body: SubscriptionCreate) -> Dict[str, Any]:
        """
        Creation input -> stored shape. Months are normalized to the 1st;
        an end month before the start month is rejected.
        """
        service_name = body.service_name.strip()
        if not service_name:
            raise EngineError("service_name must not be blank")
        if body.price < 0:
            raise EngineError("price cannot be negative")

        start_date = parse_month(body.start_date)
        end_date = parse_month(body.end_date) if body.end_date else None
        if end_date is not None and end_date < start_date:
            raise EngineError("end_date must not be before start_date")

        return {
            "service_name": service_name,
            "price": body.price,
            "user_id": body.user_id,
            "start_date": start_date,
            "end_date": end_date,
        }

    async def _require(self, subscription_id: int) -> Subscription:
        sub = await self.repo.get(subscription_id)
        if not sub:
            raise SubscriptionNotFound("Subscription not found")
        return sub

    # ---------------- public operations ----------------

    async def create(self, body: SubscriptionCreate) -> SubscriptionResponse:
        sub = await self.repo.create(**self._to_fields(body))
        log.info("subscription_created", subscription_id=sub.id, user_id=str(sub.user_id))
        return self._dto(sub)

    async def get(self, subscription_id: int) -> SubscriptionResponse:
        return self._dto(await self._require(subscription_id))

    async def update(self, subscription_id: int, body: SubscriptionCreate) -> SubscriptionResponse:
        fields = self._to_fields(body)
        sub = await self._require(subscription_id)
        sub = await self.repo.update(sub, **fields)
        log.info("subscription_updated", subscription_id=sub.id)
        return self._dto(sub)

    async def delete(self, subscription_id: int) -> None:
        sub = await self._require(subscription_id)
        await self.repo.delete(sub)
        log.info("subscription_deleted", subscription_id=subscription_id)

    async def list(
        self,
        *,
        user_id: Optional[UUID] = None,
        service_name: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[SubscriptionResponse]:
        rows = await self.repo.list(user_id=user_id, service_name=service_name, limit=limit, offset=offset)
        return [self._dto(s) for s in rows]

    async def total_cost(
        self,
        *,
        user_id: UUID,
        service_name: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> int:
        """
        1) Normalize the MM-YYYY window (InvalidDateFormat aborts the query)
        2) Fetch the user's records, filtered by exact service name
        3) Aggregate in whole months
        """
        now = self.clock()
        period_start, period_end = normalize_window(start_date, end_date, now=now)

        rows = await self.repo.list_for_user(user_id, service_name=service_name or None)
        records = [SubscriptionRecord.from_row(r) for r in rows]

        total = compute_total_cost(records, period_start, period_end, now=now, accrual=self.accrual)
        log.info(
            "total_cost_computed",
            user_id=str(user_id),
            service_name=service_name,
            period_start=period_start.isoformat(),
            period_end=period_end.isoformat(),
            records=len(records),
            total=total,
        )
        return total

    # ---------------- DTO ----------------

    @staticmethod
    def _dto(sub: Subscription) -> SubscriptionResponse:
        return SubscriptionResponse(
            id=sub.id,
            service_name=sub.service_name,
            price=sub.price,
            user_id=sub.user_id,
            start_date=format_month(sub.start_date),
            end_date=format_month(sub.end_date),
        )
