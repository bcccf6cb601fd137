"""
Database engine, session factory, and metadata shared across the application.

Everything here is asyncio based: repositories and the unit of work suspend
on each round-trip instead of blocking the event loop.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from ..core.config import Settings, settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for every persisted model."""


def _build_engine_kwargs(config: Settings) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"echo": config.database_echo, "future": True}
    if config.is_sqlite:
        # Each session needs its own connection so SQLite locking serializes writers.
        kwargs["poolclass"] = NullPool
    else:
        kwargs.update(
            pool_size=config.database_pool_size,
            max_overflow=config.database_max_overflow,
            pool_pre_ping=True,
        )
    return kwargs


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, _connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine_from_settings(config: Optional[Settings] = None) -> AsyncEngine:
    """Create the async engine for the configured database URL."""
    config = config or settings
    engine = create_async_engine(config.database_url, **_build_engine_kwargs(config))
    if config.is_sqlite:
        _enable_sqlite_foreign_keys(engine)
    logger.info("database_engine_created", extra={"dialect": engine.dialect.name})
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables (development and tests; production uses migrations)."""
    from .. import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a read session that is always closed afterwards."""
    async with session_factory() as session:
        yield session


__all__ = [
    "Base",
    "create_all",
    "create_engine_from_settings",
    "create_session_factory",
    "session_scope",
]
