"""Mixin for models stored as a materialized-path tree.

Adds the ``path``/``parent_id``/``level`` columns and async navigation and
placement methods to a declarative model. The model must also have an
``id`` primary key (``IntegerPKMixin`` or ``UUIDPKMixin``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from pathtree.core.database.hierarchy import builder, placement, queries
from pathtree.core.database.hierarchy.path import decode_ancestor_chain
from pathtree.core.database.hierarchy.repository import TreeRepository
from pathtree.core.settings import get_tree_settings

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Self

    from sqlalchemy.ext.asyncio import AsyncSession

    from pathtree.core.database.hierarchy.presenters import Presenter

_UNSET: Any = object()


class MaterializedPathMixin:
    """Mixin for models kept as a materialized-path tree.

    Each row stores:
        path: ids from the root down to the row itself, each followed by the
            separator ("3/5/9/")
        parent_id: id of the direct parent, NULL for roots
        level: depth below the root, 0 for roots

    Placement methods keep all three consistent for the row and its whole
    subtree; navigation methods turn them into plain prefix/equality queries.

    Example:
        >>> class Category(Base, IntegerPKMixin, MaterializedPathMixin):
        ...     __tablename__ = "categories"
        ...     name: Mapped[str] = mapped_column(String(255))
        >>>
        >>> electronics = await Category(name="Electronics").set_as_root(session)
        >>> laptops = await Category(name="Laptops").set_child_of(session, electronics)
        >>> laptops.path
        '1/2/'
        >>> [c.name for c in await electronics.get_descendants(session)]
        ['Laptops']
        >>>
        >>> root = await Category.get_tree(session, electronics.id)
        >>> [c.name for c in root.children]
        ['Laptops']

    Note:
        - Column names can be changed per model via __tree_columns__
        - The separator defaults to TREE_SEPARATOR and can be fixed per model
          via __path_separator__
        - ``children`` and the cached parent are transient and never saved
    """

    __allow_unmapped__ = True

    # Override in subclass to use different column names
    __tree_columns__: ClassVar[dict[str, str]] = {
        "path": "path",
        "parent": "parent_id",
        "level": "level",
    }
    __path_separator__: ClassVar[str | None] = None
    __path_length__: ClassVar[int] = 255

    @declared_attr
    def path(cls) -> Mapped[str | None]:
        return mapped_column(
            cls.get_tree_column("path"),
            String(cls.__path_length__),
            nullable=True,
            index=True,
            comment="Materialized ancestor path, NULL until first placement",
        )

    @declared_attr
    def parent_id(cls) -> Mapped[Any]:
        return mapped_column(
            cls.get_tree_column("parent"),
            ForeignKey(f"{cls.__tablename__}.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
            comment="Direct parent, NULL for roots",
        )

    @declared_attr
    def level(cls) -> Mapped[int]:
        return mapped_column(
            cls.get_tree_column("level"),
            Integer,
            nullable=False,
            default=0,
            index=True,
            comment="Depth below the root, 0 for roots",
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @classmethod
    def get_tree_column(cls, name: str) -> str | None:
        """Database column name for a tree field ("path", "parent" or "level")."""
        return cls.__tree_columns__.get(name)

    @classmethod
    def get_path_separator(cls) -> str:
        """Separator used in this model's paths."""
        return cls.__path_separator__ or get_tree_settings().separator

    @classmethod
    def tree_repository(cls) -> TreeRepository[Self]:
        """Repository used when no explicit one is passed."""
        return TreeRepository(cls)

    # ------------------------------------------------------------------
    # Transient state (never persisted)
    # ------------------------------------------------------------------

    @property
    def children(self) -> list[Any]:
        """Children attached by the tree builder; empty until a tree is built."""
        children = self.__dict__.get("_tree_children")
        if children is None:
            children = []
            self.__dict__["_tree_children"] = children
        return children

    @children.setter
    def children(self, value: list[Any]) -> None:
        self.__dict__["_tree_children"] = value

    def remember_parent(self, parent: Any) -> None:
        """Cache the parent object for subsequent ``get_parent`` calls."""
        self.__dict__["_tree_parent"] = parent

    def clear_parent_cache(self) -> None:
        """Forget the cached parent so the next ``get_parent`` queries again."""
        self.__dict__.pop("_tree_parent", None)

    # ------------------------------------------------------------------
    # Local checks (no I/O)
    # ------------------------------------------------------------------

    @property
    def is_root(self) -> bool:
        """Check if this is a placed root node (no parent, path stored).

        A saved but never placed node is not a root. This property does
        NOT query the database.
        """
        return queries.is_root(self)

    @property
    def path_ids(self) -> list[str]:
        """Ids from the root down to this node, as stored in the path.

        This property does NOT query the database.
        """
        return decode_ancestor_chain(self.path, separator=self.get_path_separator())

    @property
    def ancestor_ids(self) -> list[str]:
        """Ids of all ancestors, root first, excluding this node."""
        return self.path_ids[:-1]

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    async def set_as_root(
        self,
        session: AsyncSession,
        *,
        repository: TreeRepository[Any] | None = None,
    ) -> Self:
        """Make this node a root; its subtree moves with it."""
        await placement.set_as_root(session, self, repository=repository)
        return self

    async def set_child_of(
        self,
        session: AsyncSession,
        parent: MaterializedPathMixin,
        *,
        repository: TreeRepository[Any] | None = None,
    ) -> Self:
        """Place this node directly under ``parent``; its subtree moves with it."""
        await placement.set_child_of(session, self, parent, repository=repository)
        return self

    async def set_sibling_of(
        self,
        session: AsyncSession,
        sibling: MaterializedPathMixin,
        *,
        repository: TreeRepository[Any] | None = None,
    ) -> Self:
        """Place this node next to ``sibling``; its subtree moves with it."""
        await placement.set_sibling_of(session, self, sibling, repository=repository)
        return self

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def is_leaf(self, session: AsyncSession) -> bool:
        """Check whether no row has this node as its parent."""
        count = await self.tree_repository().count_where(session, queries.leaf_count_statement(self))
        return count == 0

    async def get_parent(self, session: AsyncSession) -> Self | None:
        """Get parent node, cached on this instance after the first lookup.

        Returns:
            Parent instance or None if this is a root node
        """
        statement = queries.parent_statement(self)
        if statement is None:
            return None

        cached = self.__dict__.get("_tree_parent", _UNSET)
        if cached is not _UNSET and cached is not None and cached.id == self.parent_id:
            return cached

        rows = await self.tree_repository().find_where(session, statement)
        parent = rows[0] if rows else None
        self.remember_parent(parent)
        return parent

    async def get_children(self, session: AsyncSession) -> list[Self]:
        """Get immediate children, ordered by id."""
        return await self.tree_repository().find_where(session, queries.children_statement(self))

    async def get_descendants(self, session: AsyncSession) -> list[Self]:
        """Get all descendants, ordered by level (shallowest first)."""
        return await self.tree_repository().find_where(session, queries.descendants_statement(self))

    async def get_ancestors(self, session: AsyncSession) -> list[Self]:
        """Get all ancestors, ordered from the root down to the parent."""
        return await self.tree_repository().find_where(session, queries.ancestors_statement(self))

    async def get_root(self, session: AsyncSession) -> Self | None:
        """Get the root of this node's tree (the node itself for a root).

        Raises:
            InvalidPathError: If this node has not been placed yet
        """
        statement = queries.root_statement(self)
        if statement is None:
            return self
        rows = await self.tree_repository().find_where(session, statement)
        return rows[0] if rows else None

    @classmethod
    async def get_roots(cls, session: AsyncSession) -> list[Self]:
        """Get all root nodes, ordered by id."""
        return await cls.tree_repository().find_where(session, queries.roots_statement(cls))

    @classmethod
    async def fetch_tree(cls, session: AsyncSession, root_id: Any) -> list[Self]:
        """Get every row of the tree rooted at ``root_id``, root first."""
        return await cls.tree_repository().find_where(
            session, queries.subtree_statement(cls, root_id)
        )

    # ------------------------------------------------------------------
    # Tree reconstruction
    # ------------------------------------------------------------------

    def build_tree(
        self,
        descendants: Iterable[MaterializedPathMixin],
        *,
        transform: str | Presenter | None = None,
    ) -> Self:
        """Attach ``descendants`` (level-ordered) under this node.

        Example:
            >>> node.build_tree(await node.get_descendants(session))
        """
        return builder.assemble_tree(self, descendants, transform=transform)

    async def load_subtree(
        self,
        session: AsyncSession,
        *,
        transform: str | Presenter | None = None,
    ) -> Self:
        """Fetch all descendants and attach them under this node."""
        return self.build_tree(await self.get_descendants(session), transform=transform)

    @classmethod
    async def get_tree(
        cls,
        session: AsyncSession,
        root_id: Any,
        *,
        transform: str | Presenter | None = None,
    ) -> Self | None:
        """Fetch and build the whole tree rooted at ``root_id``.

        Returns:
            The root with ``children`` populated, or None if no such tree exists
        """
        rows = await cls.fetch_tree(session, root_id)
        return builder.build_complete_tree(rows, transform=transform)


__all__ = [
    "MaterializedPathMixin",
]
