from __future__ import annotations

from sqlalchemy import (
    Column,
    Date,
    Index,
    Integer,
    String,
    TIMESTAMP,
    CheckConstraint,
    Uuid,
)
from sqlalchemy.sql import func
from .base import Base


# -------------------------
# Subscriptions
# -------------------------
class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, autoincrement=True)

    service_name = Column(String, nullable=False)
    price = Column(Integer, nullable=False)  # minor currency unit
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    # both normalized to the 1st of the month; end_date is the last active month
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_subs_price_non_negative"),
        CheckConstraint("end_date IS NULL OR end_date >= start_date", name="ck_subs_end_after_start"),
        Index("ix_subs_user_service", "user_id", "service_name"),
    )
