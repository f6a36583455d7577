"""Descendant path rewriting after a node moves.

Every descendant stores its ancestors' ids as a literal path prefix, so a
node whose path or level changes invalidates its whole subtree. ``propagate``
walks that subtree depth-first, pre-order (each parent rewritten before its
children are fetched), recomputing ``level`` and ``path`` for every row and
persisting it through the repository.

The walk uses an explicit stack, so deep trees do not hit the interpreter
recursion limit. It costs one query per visited node plus one save per
descendant. A store failure part-way through leaves the already visited
descendants rewritten; run placements inside ``transaction(session)`` so the
whole move commits or rolls back together.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pathtree.core.database.hierarchy.path import encode_child_path
from pathtree.core.database.hierarchy.queries import children_statement
from pathtree.core.settings import get_tree_settings
from pathtree.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from pathtree.core.database.hierarchy.mixins import MaterializedPathMixin
    from pathtree.core.database.hierarchy.repository import TreeRepository

logger = logging.getLogger(__name__)
_lazy = get_lazy_logger(__name__)


async def propagate(
    session: AsyncSession,
    node: MaterializedPathMixin,
    *,
    repository: TreeRepository[Any],
) -> int:
    """Rewrite path and level of every proper descendant of ``node``.

    Args:
        session: Database session
        node: Node whose own path/level are already up to date
        repository: Store used to fetch children and save rewritten rows

    Returns:
        Number of descendants rewritten (0 for a leaf)

    Raises:
        StoreFailureError: If fetching or saving a descendant fails
    """
    separator = type(node).get_path_separator()
    log_level = get_tree_settings().cascade_log_level_int

    rewritten = 0
    pending: list[tuple[MaterializedPathMixin, MaterializedPathMixin]] = [
        (node, child)
        for child in reversed(await repository.find_where(session, children_statement(node)))
    ]
    while pending:
        parent, child = pending.pop()
        child.level = parent.level + 1
        child.path = encode_child_path(parent.path, child.id, separator=separator)
        await repository.save(session, child)
        rewritten += 1
        _lazy.log(log_level, lambda: f"cascade: {child.id} -> path={child.path!r} level={child.level}")

        grandchildren = await repository.find_where(session, children_statement(child))
        pending.extend((child, grandchild) for grandchild in reversed(grandchildren))

    if rewritten:
        logger.info(
            "Descendants rewritten",
            extra={
                "operation": "tree.cascade",
                "node_id": node.id,
                "path": node.path,
                "descendants": rewritten,
            },
        )
    return rewritten


__all__ = ["propagate"]
