"""Statement builders for tree navigation.

Every function here derives a SQLAlchemy statement from a node's stored
``path``/``level``/``parent_id`` values and returns it unexecuted; running
it is the repository's job. Because the whole ancestor chain is stored on
each row, none of the statements needs a recursive query:

- descendants are a ``path LIKE 'prefix%'`` match
- ancestors are an ``id IN (...)`` match on the decoded chain
- children and roots are plain ``parent_id`` comparisons
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select
from sqlalchemy import inspect as sa_inspect

from pathtree.core.database.filters import (
    CollectionFilter,
    EqualsFilter,
    FilterGroup,
    IsNullFilter,
    OrderBy,
    PathPrefixFilter,
)
from pathtree.core.database.hierarchy.path import (
    decode_ancestor_chain,
    encode_root_path,
    validate_path,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Select

    from pathtree.core.database.hierarchy.mixins import MaterializedPathMixin


def coerce_ids(model: type[Any], ids: Sequence[str]) -> list[Any]:
    """Convert decoded path segments to the primary key's Python type.

    Segments come back from the path as strings; comparing them against an
    integer or UUID key needs values of the matching type.
    """
    pk = sa_inspect(model).primary_key[0]
    try:
        python_type = pk.type.python_type
    except NotImplementedError:
        return list(ids)
    if python_type is str:
        return list(ids)
    return [python_type(segment) for segment in ids]


def is_root(node: MaterializedPathMixin) -> bool:
    """Whether ``node`` is a placed root: no parent and a stored path (no I/O).

    A row saved but never placed has neither, and is not a root.
    """
    return node.parent_id is None and node.path is not None


def leaf_count_statement(node: MaterializedPathMixin) -> Select[Any]:
    """Count of rows whose parent is ``node``; zero means ``node`` is a leaf."""
    model = type(node)
    return EqualsFilter(model.parent_id, node.id).apply(
        select(func.count()).select_from(model)
    )


def parent_statement(node: MaterializedPathMixin) -> Select[Any] | None:
    """Row referenced by ``node.parent_id``, or None for a root."""
    if node.parent_id is None:
        return None
    model = type(node)
    return EqualsFilter(model.id, node.parent_id).apply(select(model))


def children_statement(node: MaterializedPathMixin) -> Select[Any]:
    """Direct children of ``node`` ordered by id."""
    model = type(node)
    return FilterGroup(
        [
            EqualsFilter(model.parent_id, node.id),
            OrderBy(model.id),
        ]
    ).apply(select(model))


def descendants_statement(node: MaterializedPathMixin) -> Select[Any]:
    """All proper descendants of ``node``, shallowest first.

    Raises:
        InvalidPathError: If ``node`` has not been placed yet
    """
    model = type(node)
    path = validate_path(node.path, separator=model.get_path_separator())
    return FilterGroup(
        [
            PathPrefixFilter(model.path, path),
            EqualsFilter(model.id, node.id, invert=True),
            OrderBy([model.level, model.id]),
        ]
    ).apply(select(model))


def ancestors_statement(node: MaterializedPathMixin) -> Select[Any]:
    """All proper ancestors of ``node``, root first.

    Raises:
        InvalidPathError: If ``node`` has not been placed yet
    """
    model = type(node)
    chain = decode_ancestor_chain(node.path, separator=model.get_path_separator())
    return FilterGroup(
        [
            CollectionFilter(model.id, coerce_ids(model, chain)),
            EqualsFilter(model.id, node.id, invert=True),
            OrderBy(model.level),
        ]
    ).apply(select(model))


def root_statement(node: MaterializedPathMixin) -> Select[Any] | None:
    """Root of the tree ``node`` belongs to, or None when ``node`` is the root.

    Raises:
        InvalidPathError: If ``node`` has not been placed yet
    """
    if is_root(node):
        return None
    model = type(node)
    chain = decode_ancestor_chain(node.path, separator=model.get_path_separator())
    return EqualsFilter(model.id, coerce_ids(model, chain[:1])[0]).apply(select(model))


def roots_statement(model: type[MaterializedPathMixin]) -> Select[Any]:
    """Every placed root row ordered by id; unplaced rows are excluded."""
    return FilterGroup(
        [
            IsNullFilter(model.parent_id),
            IsNullFilter(model.path, invert=True),
            OrderBy(model.id),
        ]
    ).apply(select(model))


def subtree_statement(model: type[MaterializedPathMixin], root_id: Any) -> Select[Any]:
    """Whole tree under ``root_id``, root included, shallowest first.

    The result is root-first and level-ascending, which is exactly the
    order the tree builder requires.
    """
    prefix = encode_root_path(root_id, separator=model.get_path_separator())
    return FilterGroup(
        [
            PathPrefixFilter(model.path, prefix),
            OrderBy([model.level, model.id]),
        ]
    ).apply(select(model))


__all__ = [
    "ancestors_statement",
    "children_statement",
    "coerce_ids",
    "descendants_statement",
    "is_root",
    "leaf_count_statement",
    "parent_statement",
    "root_statement",
    "roots_statement",
    "subtree_statement",
]
