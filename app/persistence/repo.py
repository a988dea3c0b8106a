from __future__ import annotations
from typing import Optional, List
from uuid import UUID
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.persistence.models import Subscription


# -------------------- Subscriptions --------------------

class SubscriptionRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, **kwargs) -> Subscription:
        row = Subscription(**kwargs)
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return row

    async def get(self, sub_id: int) -> Optional[Subscription]:
        res = await self.db.execute(select(Subscription).where(Subscription.id == sub_id))
        return res.scalar_one_or_none()

    async def list(
        self,
        *,
        user_id: Optional[UUID] = None,
        service_name: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Subscription]:
        q = select(Subscription)
        if user_id is not None:
            q = q.where(Subscription.user_id == user_id)
        if service_name:
            q = q.where(Subscription.service_name == service_name)
        res = await self.db.execute(q.order_by(Subscription.id).offset(offset).limit(limit))
        return list(res.scalars().all())

    async def list_for_user(self, user_id: UUID, service_name: Optional[str] = None) -> List[Subscription]:
        """
        Every subscription owned by `user_id`; `service_name` is an exact match.
        """
        q = select(Subscription).where(Subscription.user_id == user_id)
        if service_name:
            q = q.where(Subscription.service_name == service_name)
        res = await self.db.execute(q.order_by(Subscription.id))
        return list(res.scalars().all())

    async def update(
        self,
        sub: Subscription,
        *,
        service_name: str,
        price: int,
        user_id: UUID,
        start_date: date,
        end_date: Optional[date],
    ) -> Subscription:
        # full replacement: end_date=None clears the end month
        sub.service_name = service_name
        sub.price = price
        sub.user_id = user_id
        sub.start_date = start_date
        sub.end_date = end_date
        await self.db.flush()
        await self.db.refresh(sub)
        return sub

    async def delete(self, sub: Subscription) -> None:
        await self.db.delete(sub)
        await self.db.flush()
