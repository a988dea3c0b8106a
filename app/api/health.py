from __future__ import annotations
from fastapi import APIRouter

from app.core.settings import settings
from app.schemas.api_models import HealthResponse

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", app=settings.APP_NAME)
