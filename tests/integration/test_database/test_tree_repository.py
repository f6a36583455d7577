"""Integration tests for the tree repository: CRUD, hooks and store failures."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from pathtree.core.database import StoreFailureError
from pathtree.core.database.hierarchy import TreeRepository, set_as_root, set_child_of
from tests.models import Category

pytestmark = pytest.mark.integration


@pytest.fixture
def repository() -> TreeRepository[Category]:
    return TreeRepository(Category)


class TestStoreOperations:
    """save / find_one_by_id / find_where / count_where / delete."""

    @pytest.mark.asyncio
    async def test_save_assigns_id(self, db_session, repository):
        node = await repository.save(db_session, Category(name="fresh"))

        assert node.id is not None
        assert node.path is None

    @pytest.mark.asyncio
    async def test_find_one_by_id(self, db_session, repository, catalog):
        assert await repository.find_one_by_id(db_session, 2) is catalog["computers"]
        assert await repository.find_one_by_id(db_session, 999) is None

    @pytest.mark.asyncio
    async def test_find_where_and_count_where(self, db_session, repository, catalog):
        statement = select(Category).where(Category.level == 2).order_by(Category.id)

        found = await repository.find_where(db_session, statement)
        count = await repository.count_where(
            db_session, select(func.count()).select_from(Category).where(Category.level == 2)
        )

        assert [n.name for n in found] == ["laptops", "desktops"]
        assert count == 2


class TestStoreFailures:
    """SQLAlchemy errors surface as StoreFailureError."""

    @pytest.mark.asyncio
    async def test_save_failure_wrapped(self, db_session, repository):
        with pytest.raises(StoreFailureError) as exc_info:
            await repository.save(db_session, Category(name=None))

        assert exc_info.value.operation == "db.save"
        assert exc_info.value.details["reason"] == "IntegrityError"
        assert isinstance(exc_info.value.__cause__, IntegrityError)

    @pytest.mark.asyncio
    async def test_placement_failure_wrapped(self, db_session):
        with pytest.raises(StoreFailureError):
            await set_as_root(db_session, Category(name=None))


class TestHooks:
    """post_save / post_delete lifecycle hooks."""

    @pytest.mark.asyncio
    async def test_post_save_fires_for_every_rewritten_row(self, db_session, catalog):
        saved: list[str] = []
        repository = TreeRepository(
            Category, hooks={"post_save": [lambda session, node: saved.append(node.name)]}
        )

        await set_child_of(
            db_session, catalog["computers"], catalog["phones"], repository=repository
        )

        assert saved == ["computers", "laptops", "desktops"]

    @pytest.mark.asyncio
    async def test_async_hooks_are_awaited(self, db_session, repository):
        seen: list[int] = []

        async def record(session, node):
            seen.append(node.id)

        repository.add_hook("post_save", record)
        node = await Category(name="root").set_as_root(db_session, repository=repository)

        # first save assigns the id, second stores the path
        assert seen == [node.id, node.id]

    @pytest.mark.asyncio
    async def test_post_delete(self, db_session, repository, catalog):
        deleted: list[str] = []
        repository.add_hook("post_delete", lambda session, node: deleted.append(node.name))

        await repository.delete(db_session, catalog["phones"])

        assert deleted == ["phones"]

    @pytest.mark.asyncio
    async def test_hook_can_query_session(self, db_session, catalog):
        counts: list[int] = []

        async def count_children(session, node):
            counts.append(
                await TreeRepository(Category).count_where(
                    session,
                    select(func.count()).select_from(Category).where(Category.parent_id == node.id),
                )
            )

        repository = TreeRepository(Category, hooks={"post_save": [count_children]})
        await catalog["laptops"].set_as_root(db_session, repository=repository)

        assert counts == [0]

    def test_unknown_event_rejected(self, repository):
        with pytest.raises(ValueError, match="Unknown hook event"):
            repository.add_hook("pre_save", lambda session, node: None)
