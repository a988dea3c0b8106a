from __future__ import annotations

from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


# -------------------------
# Subscriptions
# -------------------------
class SubscriptionCreate(BaseModel):
    service_name: str = Field(..., min_length=1)
    price: int = Field(..., ge=0)                   # minor currency unit
    user_id: UUID
    start_date: str = Field(..., examples=["07-2025"])             # MM-YYYY
    end_date: Optional[str] = Field(None, examples=["12-2025"])    # MM-YYYY, last active month


class SubscriptionResponse(BaseModel):
    id: int
    service_name: str
    price: int
    user_id: UUID
    start_date: str               # MM-YYYY
    end_date: Optional[str] = None


# -------------------------
# Cost aggregation
# -------------------------
class TotalCostResponse(BaseModel):
    total: int


class HealthResponse(BaseModel):
    status: str
    app: str
