"""Async engine and session lifecycle for the event store.

SQLite through aiosqlite is used unless DATABASE_URL points elsewhere;
PostgreSQL through asyncpg also works. Pool sizing (DATABASE_POOL_SIZE,
DATABASE_MAX_OVERFLOW) applies to server databases only.

The API lifespan calls ``init_db`` and ``create_tables`` at startup and
``close_db`` at shutdown. Code outside a request opens its own unit of work:

```python
async with get_db() as session:
    event = await EventRepository(session).get(event_id)
```
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from event_weather.config import get_settings
from event_weather.database.models import Base

logger = logging.getLogger(__name__)

# Global engine and session factory
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_options(database_url: str) -> dict[str, Any]:
    """Engine keyword arguments appropriate for the database backend."""
    settings = get_settings()
    options: dict[str, Any] = {"echo": settings.database_echo}

    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url:
            # Every session must share the one connection holding the data
            options["poolclass"] = StaticPool
    else:
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
        options["pool_pre_ping"] = True  # Verify connections before use

    return options


async def init_db(database_url: str | None = None) -> None:
    """Build the engine and session factory.

    Args:
        database_url: Used instead of the configured DATABASE_URL when given
    """
    global _engine, _session_factory

    url = database_url or get_settings().database_url

    logger.info("Initializing database connection")

    _engine = create_async_engine(url, **_engine_options(url))

    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    logger.info("Database connection initialized")


async def close_db() -> None:
    """Dispose of the engine and forget the session factory."""
    global _engine, _session_factory

    if _engine is None:
        return

    logger.info("Closing database connection")
    await _engine.dispose()
    _engine = None
    _session_factory = None


def _require_engine() -> AsyncEngine:
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _engine


async def create_tables() -> None:
    """Create all database tables if they do not exist."""
    async with _require_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables created")


async def drop_tables() -> None:
    """Drop every table in the event store (tests and local resets only)."""
    async with _require_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    logger.warning("Database tables dropped")


@asynccontextmanager
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Open a session for one unit of work.

    Repository methods commit their own changes. Anything left uncommitted
    when the block raises is rolled back, and the session is always closed.
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    async with _session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session.

    ```python
    @router.get("/{event_id}")
    async def get_event(event_id: str, db: AsyncSession = Depends(get_db_session)):
        return await EventRepository(db).get(event_id)
    ```
    """
    async with get_db() as session:
        yield session
