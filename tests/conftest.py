"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings isolation between tests
    - Database Fixtures: in-memory SQLite engine and session
    - Tree Fixtures: small pre-built trees

Models live in ``tests/models.py`` so test modules can import them without
importing this file a second time.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from pathtree.core.database import Base
from pathtree.core.settings import DatabaseSettings, clear_all_caches
from pathtree.infra.database import create_engine, create_session_factory
from tests.models import Category

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterator

    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

# Tests never read a developer's tree overrides
for _var in ("TREE_SEPARATOR", "TREE_PRESENTERS", "TREE_CASCADE_LOG_LEVEL"):
    os.environ.pop(_var, None)


# ============================================================================
# Environment
# ============================================================================


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Reload cached settings around every test."""
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite.

    Foreign keys are enforced, so deleting a node cascades to its subtree.
    """
    engine = create_engine(DatabaseSettings(dsn="sqlite+aiosqlite:///:memory:"))
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create async database session with automatic table creation and cleanup."""
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = create_session_factory(
        db_engine, DatabaseSettings(dsn="sqlite+aiosqlite:///:memory:")
    )
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# ============================================================================
# Tree Fixtures
# ============================================================================


@pytest.fixture
async def catalog(db_session: AsyncSession) -> dict[str, Category]:
    """Small category tree.

    electronics (1/)
    ├── computers (1/2/)
    │   ├── laptops (1/2/4/)
    │   └── desktops (1/2/5/)
    └── phones (1/3/)
    """
    electronics = await Category(name="electronics").set_as_root(db_session)
    computers = await Category(name="computers").set_child_of(db_session, electronics)
    phones = await Category(name="phones").set_child_of(db_session, electronics)
    laptops = await Category(name="laptops").set_child_of(db_session, computers)
    desktops = await Category(name="desktops").set_child_of(db_session, computers)
    return {
        "electronics": electronics,
        "computers": computers,
        "phones": phones,
        "laptops": laptops,
        "desktops": desktops,
    }
