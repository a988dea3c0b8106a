# app/core/logger.py
from __future__ import annotations
import logging
import sys
import structlog
from structlog.typing import EventDict, WrappedLogger
from app.core.settings import settings


def _service_context(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    # every line says which service/environment emitted it
    event_dict.setdefault("app", settings.APP_NAME)
    event_dict.setdefault("env", settings.ENV)
    return event_dict


def _renderers() -> list:
    if settings.DEV_MODE:
        return [structlog.processors.ExceptionRenderer(), structlog.dev.ConsoleRenderer()]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def setup_logging() -> None:
    """
    Routes stdlib logging (uvicorn, SQLAlchemy) to stdout and configures
    structlog for the service loggers.

    Loggers are not cached under ENV=test so structlog.testing.capture_logs
    sees events from module-level loggers.
    """
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)

    sql_level = logging.INFO if settings.DB_ECHO else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _service_context,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            *_renderers(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=settings.ENV != "test",
    )
