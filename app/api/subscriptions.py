# app/api/subscriptions.py
from __future__ import annotations
from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import get_db, get_engine
from app.engine.engine import SubscriptionEngine, EngineError, InvalidDateFormat, SubscriptionNotFound
from app.schemas.api_models import (
    SubscriptionCreate,
    SubscriptionResponse,
    TotalCostResponse,
)

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


def _http_error(e: EngineError) -> HTTPException:
    if isinstance(e, SubscriptionNotFound):
        return HTTPException(status_code=404, detail={"type": "not_found", "message": str(e)})
    if isinstance(e, InvalidDateFormat):
        return HTTPException(status_code=400, detail={"type": "invalid_date_format", "message": str(e)})
    return HTTPException(status_code=400, detail={"type": "validation_error", "message": str(e)})


@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_subscription(
    body: SubscriptionCreate,
    db: AsyncSession = Depends(get_db),
    engine: SubscriptionEngine = Depends(get_engine),
):
    try:
        sub = await engine.create(body)
    except EngineError as e:
        raise _http_error(e)
    await db.commit()
    return sub

# declared before "/{subscription_id}" so "total" is not read as an id
@router.get("/total", response_model=TotalCostResponse)
async def get_total_cost(
    user_id: UUID = Query(...),
    service_name: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None, description="MM-YYYY, inclusive; default: unbounded past"),
    end_date: Optional[str] = Query(None, description="MM-YYYY, whole month inclusive; default: now"),
    engine: SubscriptionEngine = Depends(get_engine),
):
    """
    Total amount paid by a user over the window, in whole calendar months.
    """
    try:
        total = await engine.total_cost(
            user_id=user_id,
            service_name=service_name,
            start_date=start_date,
            end_date=end_date,
        )
    except EngineError as e:
        raise _http_error(e)
    return TotalCostResponse(total=total)

@router.get("", response_model=List[SubscriptionResponse])
async def list_subscriptions(
    user_id: Optional[UUID] = Query(None),
    service_name: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    engine: SubscriptionEngine = Depends(get_engine),
):
    return await engine.list(user_id=user_id, service_name=service_name, limit=limit, offset=offset)

@router.get("/{subscription_id}", response_model=SubscriptionResponse)
async def get_subscription(
    subscription_id: int,
    engine: SubscriptionEngine = Depends(get_engine),
):
    try:
        return await engine.get(subscription_id)
    except EngineError as e:
        raise _http_error(e)

@router.put("/{subscription_id}", response_model=SubscriptionResponse)
async def update_subscription(
    subscription_id: int,
    body: SubscriptionCreate,
    db: AsyncSession = Depends(get_db),
    engine: SubscriptionEngine = Depends(get_engine),
):
    try:
        sub = await engine.update(subscription_id, body)
    except EngineError as e:
        raise _http_error(e)
    await db.commit()
    return sub

@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subscription(
    subscription_id: int,
    db: AsyncSession = Depends(get_db),
    engine: SubscriptionEngine = Depends(get_engine),
):
    try:
        await engine.delete(subscription_id)
    except EngineError as e:
        raise _http_error(e)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
