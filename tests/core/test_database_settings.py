from app.core.deps import engine
from app.core.settings import settings


def test_suite_runs_on_in_memory_sqlite():
    # an exported DATABASE_URL must never point the suite at a real database
    assert settings.DATABASE_URL == "sqlite+aiosqlite:///:memory:"
    assert engine.url.drivername == "sqlite+aiosqlite"
    assert engine.url.database == ":memory:"
