"""Integration tests for tree navigation queries."""

from __future__ import annotations

import pytest

from pathtree.core.database.hierarchy import InvalidPathError, TreeRepository
from tests.models import Category, Tag

pytestmark = pytest.mark.integration


def _names(nodes) -> list[str]:
    return [node.name for node in nodes]


class TestLocalChecks:
    """Properties computed without queries."""

    @pytest.mark.asyncio
    async def test_path_ids(self, catalog):
        laptops = catalog["laptops"]

        assert laptops.path_ids == ["1", "2", "4"]
        assert laptops.ancestor_ids == ["1", "2"]
        assert not laptops.is_root
        assert catalog["electronics"].is_root


class TestNavigation:
    """Queries derived from path, parent_id and level."""

    @pytest.mark.asyncio
    async def test_is_leaf(self, db_session, catalog):
        assert await catalog["laptops"].is_leaf(db_session) is True
        assert await catalog["phones"].is_leaf(db_session) is True
        assert await catalog["computers"].is_leaf(db_session) is False

    @pytest.mark.asyncio
    async def test_get_parent(self, db_session, catalog):
        assert await catalog["electronics"].get_parent(db_session) is None
        assert await catalog["phones"].get_parent(db_session) is catalog["electronics"]

    @pytest.mark.asyncio
    async def test_get_parent_memoized(self, db_session, catalog):
        laptops = catalog["laptops"]
        laptops.clear_parent_cache()

        first = await laptops.get_parent(db_session)
        second = await laptops.get_parent(db_session)

        assert first is second is catalog["computers"]

    @pytest.mark.asyncio
    async def test_get_children(self, db_session, catalog):
        assert _names(await catalog["electronics"].get_children(db_session)) == [
            "computers",
            "phones",
        ]
        assert await catalog["laptops"].get_children(db_session) == []

    @pytest.mark.asyncio
    async def test_get_descendants_level_ordered(self, db_session, catalog):
        descendants = await catalog["electronics"].get_descendants(db_session)

        assert _names(descendants) == ["computers", "phones", "laptops", "desktops"]
        assert [d.level for d in descendants] == sorted(d.level for d in descendants)

    @pytest.mark.asyncio
    async def test_get_descendants_excludes_self(self, db_session, catalog):
        assert _names(await catalog["computers"].get_descendants(db_session)) == [
            "laptops",
            "desktops",
        ]

    @pytest.mark.asyncio
    async def test_get_ancestors_root_first(self, db_session, catalog):
        assert _names(await catalog["laptops"].get_ancestors(db_session)) == [
            "electronics",
            "computers",
        ]
        assert await catalog["electronics"].get_ancestors(db_session) == []

    @pytest.mark.asyncio
    async def test_get_root(self, db_session, catalog):
        assert await catalog["desktops"].get_root(db_session) is catalog["electronics"]
        assert await catalog["electronics"].get_root(db_session) is catalog["electronics"]

    @pytest.mark.asyncio
    async def test_get_roots(self, db_session, catalog):
        books = await Category(name="books").set_as_root(db_session)

        roots = await Category.get_roots(db_session)

        assert roots == [catalog["electronics"], books]

    @pytest.mark.asyncio
    async def test_fetch_tree_root_first(self, db_session, catalog):
        rows = await Category.fetch_tree(db_session, catalog["electronics"].id)

        assert rows[0] is catalog["electronics"]
        assert _names(rows) == ["electronics", "computers", "phones", "laptops", "desktops"]

    @pytest.mark.asyncio
    async def test_prefix_does_not_match_longer_ids(self, db_session, catalog):
        """Root 1 must not pick up the tree of root 11."""
        eleven = await Category(id=11, name="eleven").set_as_root(db_session)
        await Category(id=12, name="twelve").set_child_of(db_session, eleven)

        rows = await Category.fetch_tree(db_session, 1)
        descendants = await catalog["electronics"].get_descendants(db_session)

        assert "eleven" not in _names(rows)
        assert "twelve" not in _names(descendants)
        assert _names(await Category.fetch_tree(db_session, 11)) == ["eleven", "twelve"]

    @pytest.mark.asyncio
    async def test_unplaced_node(self, db_session):
        node = Category(name="loose")
        db_session.add(node)
        await db_session.flush()

        assert await node.get_parent(db_session) is None
        assert await node.is_leaf(db_session) is True
        with pytest.raises(InvalidPathError):
            await node.get_descendants(db_session)
        with pytest.raises(InvalidPathError):
            await node.get_ancestors(db_session)
        with pytest.raises(InvalidPathError):
            await node.get_root(db_session)

    @pytest.mark.asyncio
    async def test_saved_but_unplaced_row_is_not_a_root(self, db_session, catalog):
        stray = await TreeRepository(Category).save(db_session, Category(name="stray"))

        assert stray.path is None
        assert not stray.is_root
        assert await Category.get_roots(db_session) == [catalog["electronics"]]

    @pytest.mark.asyncio
    async def test_prefix_match_is_case_sensitive(self, db_session):
        lower = await Tag(id="a").set_as_root(db_session)
        upper = await Tag(id="A").set_as_root(db_session)
        await Tag(id="x").set_child_of(db_session, upper)
        await Tag(id="y").set_child_of(db_session, lower)

        assert [t.id for t in await lower.get_descendants(db_session)] == ["y"]
        assert [t.id for t in await Tag.fetch_tree(db_session, "A")] == ["A", "x"]

        tree = await Tag.get_tree(db_session, "a")
        assert [child.id for child in tree.children] == ["y"]


class TestTreeBuilding:
    """Fetching and rebuilding nested trees."""

    @pytest.mark.asyncio
    async def test_get_tree(self, db_session, catalog):
        root = await Category.get_tree(db_session, catalog["electronics"].id)

        assert root is catalog["electronics"]
        assert _names(root.children) == ["computers", "phones"]
        assert _names(root.children[0].children) == ["laptops", "desktops"]
        assert root.children[1].children == []

    @pytest.mark.asyncio
    async def test_get_tree_missing_root(self, db_session, catalog):
        assert await Category.get_tree(db_session, 999) is None

    @pytest.mark.asyncio
    async def test_get_tree_with_presenter(self, db_session, catalog):
        root = await Category.get_tree(
            db_session, catalog["electronics"].id, transform=lambda node: node.name.upper()
        )

        assert root.children == ["COMPUTERS", "PHONES"]

    @pytest.mark.asyncio
    async def test_load_subtree(self, db_session, catalog):
        computers = await catalog["computers"].load_subtree(db_session)

        assert _names(computers.children) == ["laptops", "desktops"]

    @pytest.mark.asyncio
    async def test_build_tree_from_descendants(self, db_session, catalog):
        electronics = catalog["electronics"]

        electronics.build_tree(await electronics.get_descendants(db_session))

        assert _names(electronics.children[0].children) == ["laptops", "desktops"]

    @pytest.mark.asyncio
    async def test_children_are_not_persisted(self, db_session, catalog):
        await Category.get_tree(db_session, 1)
        await db_session.flush()

        assert not db_session.dirty
