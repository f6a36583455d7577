"""Node placement: make a node a root, a child, or a sibling.

All three operations follow the same steps:

1. validate the target (saved and placed, and not inside the moving node)
2. save the node once if it has no id yet, since its path embeds the id
3. compute the new path, level and parent_id
4. save the node
5. rewrite every existing descendant (no-op for a fresh leaf)

Placement is idempotent: repeating it with the same target produces the
same path, level and parent. A placement and its cascade run as separate
statements; bracket the call with ``transaction(session)`` to make the move
atomic.

Example:
    async with transaction(session):
        await set_child_of(session, laptops, computers)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pathtree.core.database.hierarchy.cascade import propagate
from pathtree.core.database.hierarchy.exceptions import (
    InvalidPlacementError,
    ParentNotPersistedError,
    SiblingNotPersistedError,
)
from pathtree.core.database.hierarchy.path import (
    decode_ancestor_chain,
    encode_child_path,
    encode_root_path,
    encode_sibling_path,
)
from pathtree.core.database.hierarchy.repository import TreeRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from pathtree.core.database.hierarchy.mixins import MaterializedPathMixin

logger = logging.getLogger(__name__)


def _is_placed(node: MaterializedPathMixin) -> bool:
    return node.id is not None and bool(node.path)


def _check_not_inside(node: MaterializedPathMixin, chain: list[str], target: Any) -> None:
    """Reject targets whose ancestor chain contains ``node`` itself."""
    if node.id is not None and str(node.id) in chain:
        raise InvalidPlacementError(node, target)


async def _ensure_persisted(
    session: AsyncSession,
    node: MaterializedPathMixin,
    repository: TreeRepository[Any],
) -> None:
    if node.id is None:
        await repository.save(session, node)


async def _finish(
    session: AsyncSession,
    node: MaterializedPathMixin,
    repository: TreeRepository[Any],
    operation: str,
) -> MaterializedPathMixin:
    await repository.save(session, node)
    descendants = await propagate(session, node, repository=repository)
    logger.info(
        "Node placed",
        extra={
            "operation": operation,
            "node_id": node.id,
            "path": node.path,
            "level": node.level,
            "parent_id": node.parent_id,
            "descendants": descendants,
        },
    )
    return node


async def set_as_root(
    session: AsyncSession,
    node: MaterializedPathMixin,
    *,
    repository: TreeRepository[Any] | None = None,
) -> MaterializedPathMixin:
    """Detach ``node`` (and its subtree) into a tree of its own.

    Returns:
        The node, with ``path == "<id>/"``, ``level == 0``, ``parent_id is None``
    """
    repository = repository or TreeRepository(type(node))
    await _ensure_persisted(session, node, repository)

    node.path = encode_root_path(node.id, separator=type(node).get_path_separator())
    node.parent_id = None
    node.level = 0
    node.remember_parent(None)
    return await _finish(session, node, repository, "tree.set_as_root")


async def set_child_of(
    session: AsyncSession,
    node: MaterializedPathMixin,
    parent: MaterializedPathMixin,
    *,
    repository: TreeRepository[Any] | None = None,
) -> MaterializedPathMixin:
    """Place ``node`` (and its subtree) directly under ``parent``.

    Raises:
        ParentNotPersistedError: If ``parent`` has no id or path
        InvalidPlacementError: If ``parent`` is ``node`` or one of its descendants
    """
    if not _is_placed(parent):
        raise ParentNotPersistedError(parent)
    separator = type(node).get_path_separator()
    _check_not_inside(node, decode_ancestor_chain(parent.path, separator=separator), parent)

    repository = repository or TreeRepository(type(node))
    await _ensure_persisted(session, node, repository)

    node.path = encode_child_path(parent.path, node.id, separator=separator)
    node.parent_id = parent.id
    node.level = parent.level + 1
    node.remember_parent(parent)
    return await _finish(session, node, repository, "tree.set_child_of")


async def set_sibling_of(
    session: AsyncSession,
    node: MaterializedPathMixin,
    sibling: MaterializedPathMixin,
    *,
    repository: TreeRepository[Any] | None = None,
) -> MaterializedPathMixin:
    """Place ``node`` (and its subtree) under the same parent as ``sibling``.

    Placing a node next to a root makes it a root.

    Raises:
        SiblingNotPersistedError: If ``sibling`` has no id or path
        InvalidPlacementError: If ``sibling`` is a proper descendant of ``node``
    """
    if not _is_placed(sibling):
        raise SiblingNotPersistedError(sibling)
    separator = type(node).get_path_separator()
    _check_not_inside(node, decode_ancestor_chain(sibling.path, separator=separator)[:-1], sibling)

    repository = repository or TreeRepository(type(node))
    await _ensure_persisted(session, node, repository)

    node.path = encode_sibling_path(sibling.path, node.id, separator=separator)
    node.parent_id = sibling.parent_id
    node.level = sibling.level
    node.clear_parent_cache()
    return await _finish(session, node, repository, "tree.set_sibling_of")


__all__ = [
    "set_as_root",
    "set_child_of",
    "set_sibling_of",
]
