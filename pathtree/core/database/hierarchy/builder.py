"""Rebuild an in-memory tree from flat, level-ordered rows.

The builder makes one pass over the rows with an ``id -> node`` map. Each
row after the root is looked up by its ``parent_id`` and attached to that
parent's ``children`` list. The map holds the row objects themselves, so a
node attached early keeps receiving its own children as later rows arrive.

Rows must come root first and every parent must precede its children,
which a level-ascending fetch guarantees (see ``subtree_statement`` and
``descendants_statement``). The input is never re-sorted.

Building is all-or-nothing: attachments are collected first and only
installed once every row has found its parent, so a failed build leaves
the input nodes untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pathtree.core.database.hierarchy.exceptions import DuplicateNodeError, OrphanNodeError
from pathtree.core.database.hierarchy.presenters import presenter_registry
from pathtree.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pathtree.core.database.hierarchy.mixins import MaterializedPathMixin
    from pathtree.core.database.hierarchy.presenters import Presenter

_lazy = get_lazy_logger(__name__)


def assemble_tree[N: MaterializedPathMixin](
    root: N,
    rest: Iterable[MaterializedPathMixin],
    *,
    transform: str | Presenter | None = None,
) -> N:
    """Attach ``rest`` under ``root`` and return ``root``.

    Args:
        root: Subtree root; never transformed
        rest: Remaining rows, each preceded by its parent
        transform: Optional presenter applied to every attached child

    Returns:
        ``root`` with ``children`` populated recursively

    Raises:
        DuplicateNodeError: If an id occurs twice, the root's included
        OrphanNodeError: If a row's parent has not been seen before it
        UnknownTransformError: If ``transform`` cannot be resolved
    """
    return _attach(root, rest, presenter_registry.resolve(transform))


def _attach[N: MaterializedPathMixin](
    root: N,
    rest: Iterable[MaterializedPathMixin],
    presenter: Presenter | None,
) -> N:
    refs: dict[Any, MaterializedPathMixin] = {root.id: root}
    attachments: dict[Any, list[Any]] = {root.id: []}
    for node in rest:
        if node.id in refs:
            raise DuplicateNodeError(node.id)
        parent_id = node.parent_id
        if parent_id not in refs:
            raise OrphanNodeError(node.id, parent_id)
        refs[node.id] = node
        attachments[node.id] = []
        attachments[parent_id].append(presenter(node) if presenter else node)

    for node_id, children in attachments.items():
        refs[node_id].children = children

    _lazy.debug(lambda: f"tree built: root={root.id} nodes={len(refs)}")
    return root


def build_complete_tree(
    nodes: Iterable[MaterializedPathMixin],
    *,
    transform: str | Presenter | None = None,
) -> MaterializedPathMixin | None:
    """Build a tree from rows whose first element is the root.

    Returns:
        The root with ``children`` populated, or None for empty input

    Raises:
        DuplicateNodeError: If an id occurs twice
        OrphanNodeError: If a row's parent has not been seen before it
        UnknownTransformError: If ``transform`` cannot be resolved
    """
    presenter = presenter_registry.resolve(transform)
    iterator = iter(nodes)
    root = next(iterator, None)
    if root is None:
        return None
    return _attach(root, iterator, presenter)


__all__ = [
    "assemble_tree",
    "build_complete_tree",
]
