"""Async SQLAlchemy 2.0 engine and per-request sessions.

Writes run inside one transaction per request: ``get_db`` commits when the
handler returns and rolls back when it raises, so a failed photo delete or
rating recompute never leaves half a change behind. Read-heavy dashboard
endpoints instead take the session factory and open a short-lived session
per concurrent query, which is why the pool is sized from settings.
"""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings, get_settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by the storefront records."""


def engine_options(settings: Settings) -> dict[str, Any]:
    """Keyword arguments for ``create_async_engine``.

    SQLite uses a pool without size limits, so the queue settings only
    apply to server databases.
    """
    options: dict[str, Any] = {"echo": settings.debug, "pool_pre_ping": True}
    if make_url(settings.database_url).get_backend_name() != "sqlite":
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
    return options


@lru_cache
def get_engine() -> AsyncEngine:
    """Process-wide async engine."""
    settings = get_settings()
    return create_async_engine(settings.database_url, **engine_options(settings))


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Session factory, also injected into the dashboard services."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session committed on success.

    Yields:
        AsyncSession: Session holding the request's transaction.
    """
    async with get_session_maker()() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.warning("database.transaction_rolled_back", error_type=type(e).__name__)
            raise
