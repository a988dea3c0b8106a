"""
Shared fixtures.

The app runs against an in-memory SQLite database (aiosqlite) with "now"
pinned to 2025-08-15 through the get_clock dependency.
"""

import os
from datetime import date

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENV"] = "test"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.deps import engine, get_clock
from app.main import app
from app.persistence.base import Base

FIXED_TODAY = date(2025, 8, 15)


@pytest.fixture
def fixed_today():
    return FIXED_TODAY


@pytest_asyncio.fixture
async def db_tables():
    """Create the schema for one test; disposing drops the in-memory database."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_tables):
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_TODAY)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()
