# app/core/deps.py
from collections.abc import AsyncGenerator, Callable
from datetime import date, datetime, timezone
from fastapi import Depends
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool
from app.core.settings import settings
from app.engine.engine import SubscriptionEngine
from app.engine.strategies.registry import build_accrual
from app.persistence.repo import SubscriptionRepo


def _engine_kwargs() -> dict:
    if settings.is_sqlite:
        # one shared connection so ":memory:" databases survive across sessions
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
    }


engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, **_engine_kwargs())
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session

def _today_utc() -> date:
    return datetime.now(tz=timezone.utc).date()

def get_clock() -> Callable[[], date]:
    # overridden in tests to pin "now"
    return _today_utc

def get_subscription_repo(db: AsyncSession = Depends(get_db)) -> SubscriptionRepo:
    return SubscriptionRepo(db)

def get_engine(
    repo: SubscriptionRepo = Depends(get_subscription_repo),
    clock: Callable[[], date] = Depends(get_clock),
) -> SubscriptionEngine:
    return SubscriptionEngine(repo=repo, clock=clock, accrual=build_accrual(settings.OPEN_ENDED_ACCRUAL))
