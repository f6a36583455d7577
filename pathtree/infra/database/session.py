"""Async engine and session management.

The engine and session factory are created on first use from
``DatabaseSettings`` and cached for the life of the process. Tests and
scripts that need their own engine call ``create_engine`` and
``create_session_factory`` directly.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from pathtree.core.settings import get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncEngine

    from pathtree.core.settings import DatabaseSettings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(dbapi_conn: Any, connection_record: Any) -> None:
    """Turn on FK enforcement so ON DELETE CASCADE removes subtrees."""
    _ = connection_record
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(settings: DatabaseSettings | None = None) -> AsyncEngine:
    """Create an async engine from database settings.

    Args:
        settings: Database settings; defaults to ``get_db_settings()``

    Returns:
        New AsyncEngine. SQLite engines enforce foreign keys.
    """
    settings = settings or get_db_settings()
    engine = create_async_engine(
        settings.dsn,
        echo=settings.echo,
        pool_pre_ping=settings.pool_pre_ping,
    )
    if settings.is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug(
        "Database engine created",
        extra={"dialect": engine.dialect.name, "echo": settings.echo},
    )
    return engine


def create_session_factory(
    engine: AsyncEngine,
    settings: DatabaseSettings | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to ``engine``."""
    settings = settings or get_db_settings()
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=settings.expire_on_commit,
        autoflush=False,
    )


def get_engine() -> AsyncEngine:
    """Process-wide engine, created on first call."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Process-wide session factory, created on first call."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Commits when the block exits normally and rolls back when it raises.

    Example:
        async with get_async_session() as session:
            await node.set_child_of(session, parent)
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncGenerator[AsyncSession]:
    """Run a block in one transaction on ``session``.

    A placement and its descendant rewrites issue many statements; wrapping
    them here makes the move commit or roll back as a whole. When a
    transaction is already open a SAVEPOINT is used, so only the block's own
    changes are undone on failure.

    Example:
        async with transaction(session):
            await set_child_of(session, node, parent)
    """
    if session.in_transaction():
        async with session.begin_nested():
            yield session
    else:
        async with session.begin():
            yield session


async def close_database() -> None:
    """Dispose the process-wide engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database connections closed")
    _engine = None
    _session_factory = None


__all__ = [
    "close_database",
    "create_engine",
    "create_session_factory",
    "get_async_session",
    "get_engine",
    "get_session_factory",
    "transaction",
]
