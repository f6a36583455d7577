"""Materialized path encoding with navigation utilities.

A materialized path stores the full ancestor chain of a row as a
separator-terminated string of ids, root first and the row's own id last:

- "7/"        a root with id 7
- "3/5/9/"    node 9, child of 5, grandchild of root 3

The module-level functions are the codec used by placement and cascade
code. ``MaterializedPath`` wraps a path for Python-side navigation without
requiring database queries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pathtree.core.database.hierarchy.exceptions import InvalidPathError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Self

SEPARATOR = "/"


def _segment(node_id: Any, separator: str) -> str:
    """Render an id as one path segment."""
    if node_id is None:
        raise InvalidPathError(node_id, "node id is not assigned")
    segment = str(node_id)
    if not segment:
        raise InvalidPathError(node_id, "node id is empty")
    if separator in segment:
        raise InvalidPathError(node_id, f"node id contains separator {separator!r}")
    return segment


def validate_path(path: str | None, *, separator: str = SEPARATOR) -> str:
    """Check that ``path`` is a well-formed materialized path.

    Args:
        path: Path string to check
        separator: Segment separator

    Returns:
        The path, unchanged

    Raises:
        InvalidPathError: If the path is empty, lacks the trailing
            separator, or contains an empty segment
    """
    if not path:
        raise InvalidPathError(path, "path is empty")
    if not path.endswith(separator):
        raise InvalidPathError(path, f"path must end with {separator!r}")
    if "" in path[: -len(separator)].split(separator):
        raise InvalidPathError(path, "path contains an empty segment")
    return path


def encode_root_path(node_id: Any, *, separator: str = SEPARATOR) -> str:
    """Path of a root node.

    Example:
        >>> encode_root_path(7)
        '7/'
    """
    return f"{_segment(node_id, separator)}{separator}"


def encode_child_path(parent_path: str, node_id: Any, *, separator: str = SEPARATOR) -> str:
    """Path of a node placed directly under ``parent_path``.

    Example:
        >>> encode_child_path("3/5/", 9)
        '3/5/9/'
    """
    validate_path(parent_path, separator=separator)
    return f"{parent_path}{_segment(node_id, separator)}{separator}"


def encode_sibling_path(sibling_path: str, node_id: Any, *, separator: str = SEPARATOR) -> str:
    """Path of a node placed next to the node at ``sibling_path``.

    Exactly the last id segment of the sibling's path is replaced,
    whatever its lexical form, so both nodes share the parent prefix.

    Example:
        >>> encode_sibling_path("3/5/", 9)
        '3/9/'
        >>> encode_sibling_path("3/", 9)
        '9/'
    """
    chain = decode_ancestor_chain(sibling_path, separator=separator)
    prefix = "".join(f"{segment}{separator}" for segment in chain[:-1])
    return f"{prefix}{_segment(node_id, separator)}{separator}"


def decode_ancestor_chain(path: str, *, separator: str = SEPARATOR) -> list[str]:
    """Ids encoded in ``path``, root first, the node itself last.

    Example:
        >>> decode_ancestor_chain("3/5/9/")
        ['3', '5', '9']
    """
    validate_path(path, separator=separator)
    chain = path.split(separator)
    chain.pop()  # trailing separator leaves an empty last element
    return chain


class MaterializedPath:
    """Python wrapper for materialized path strings.

    Provides convenient methods for path manipulation, navigation,
    and validation. Depth counts segments, so a root path has depth 1
    and ``depth == level + 1`` for a consistently placed node.

    Example:
        >>> path = MaterializedPath("3/5/9/")
        >>> path.depth
        3
        >>> path.parent
        MaterializedPath('3/5/')
        >>> path.ids
        ['3', '5', '9']
        >>> path.is_ancestor_of("3/5/9/12/")
        True
        >>> path / 12
        MaterializedPath('3/5/9/12/')
    """

    __slots__ = ("_ids", "_path", "_separator")
    _path: str
    _ids: list[str]
    _separator: str

    def __init__(self, path: str | MaterializedPath, *, separator: str = SEPARATOR) -> None:
        """Initialize from a path string or another MaterializedPath.

        Raises:
            InvalidPathError: If the path is malformed
        """
        if isinstance(path, MaterializedPath):
            self._path = path._path
            self._ids = path._ids
            self._separator = path._separator
        else:
            self._separator = separator
            self._path = str(path).strip()
            self._ids = decode_ancestor_chain(self._path, separator=separator)

    def _coerce(self, other: str | MaterializedPath) -> MaterializedPath:
        if isinstance(other, MaterializedPath):
            return other
        return MaterializedPath(other, separator=self._separator)

    def _from_ids(self, ids: list[str]) -> MaterializedPath:
        return MaterializedPath(
            "".join(f"{segment}{self._separator}" for segment in ids),
            separator=self._separator,
        )

    @property
    def depth(self) -> int:
        """Number of ids in the path (1 for a root)."""
        return len(self._ids)

    @property
    def level(self) -> int:
        """Level of the node this path belongs to (0 for a root)."""
        return len(self._ids) - 1

    @property
    def ids(self) -> list[str]:
        """Copy of the id chain, root first."""
        return list(self._ids)

    @property
    def root(self) -> str:
        """Id of the root of the chain."""
        return self._ids[0]

    @property
    def leaf(self) -> str:
        """Id of the node the path belongs to."""
        return self._ids[-1]

    @property
    def parent(self) -> MaterializedPath | None:
        """Path one level up, or None for a root."""
        if self.depth <= 1:
            return None
        return self._from_ids(self._ids[:-1])

    @property
    def ancestors(self) -> list[MaterializedPath]:
        """All ancestor paths ordered root to parent (excludes self).

        Example:
            >>> [str(a) for a in MaterializedPath("1/2/3/").ancestors]
            ['1/', '1/2/']
        """
        return [self._from_ids(self._ids[:i]) for i in range(1, self.depth)]

    def child(self, node_id: Any) -> MaterializedPath:
        """Path of a child with ``node_id``."""
        return MaterializedPath(
            encode_child_path(self._path, node_id, separator=self._separator),
            separator=self._separator,
        )

    def sibling(self, node_id: Any) -> MaterializedPath:
        """Path with the same parent and a different last id."""
        return MaterializedPath(
            encode_sibling_path(self._path, node_id, separator=self._separator),
            separator=self._separator,
        )

    def is_ancestor_of(self, other: str | MaterializedPath) -> bool:
        """Check if this path is a proper ancestor of other.

        Example:
            >>> MaterializedPath("1/2/").is_ancestor_of("1/2/3/")
            True
            >>> MaterializedPath("1/2/").is_ancestor_of("1/2/")
            False
        """
        other_path = self._coerce(other)
        if self.depth >= other_path.depth:
            return False
        return other_path._ids[: self.depth] == self._ids

    def is_descendant_of(self, other: str | MaterializedPath) -> bool:
        """Check if this path is a proper descendant of other."""
        return self._coerce(other).is_ancestor_of(self)

    def is_sibling_of(self, other: str | MaterializedPath) -> bool:
        """Check if both paths share the same parent.

        Roots are siblings of each other.
        """
        other_path = self._coerce(other)
        if self.depth != other_path.depth:
            return False
        return self._ids[:-1] == other_path._ids[:-1]

    def common_ancestor(self, other: str | MaterializedPath) -> MaterializedPath | None:
        """Longest shared prefix path, or None when the roots differ.

        Example:
            >>> MaterializedPath("1/2/3/").common_ancestor("1/2/4/")
            MaterializedPath('1/2/')
        """
        other_path = self._coerce(other)
        common: list[str] = []
        for a, b in zip(self._ids, other_path._ids, strict=False):
            if a != b:
                break
            common.append(a)
        return self._from_ids(common) if common else None

    def __truediv__(self, other: Any) -> MaterializedPath:
        """Path concatenation using / operator."""
        return self.child(other)

    def __iter__(self) -> Iterator[str]:
        """Iterate over ids from root to leaf."""
        return iter(self._ids)

    def __len__(self) -> int:
        """Return depth (number of ids)."""
        return self.depth

    def __str__(self) -> str:
        """Return string representation for database storage."""
        return self._path

    def __repr__(self) -> str:
        """Return debug representation."""
        return f"MaterializedPath({self._path!r})"

    def __eq__(self, other: object) -> bool:
        """Check equality with another path or string."""
        if isinstance(other, MaterializedPath):
            return self._path == other._path
        if isinstance(other, str):
            return self._path == other
        return False

    def __hash__(self) -> int:
        """Return hash for use in sets/dicts."""
        return hash(self._path)

    @classmethod
    def from_ids(cls, *ids: Any, separator: str = SEPARATOR) -> Self:
        """Create a path from an id chain, root first.

        Example:
            >>> MaterializedPath.from_ids(3, 5, 9)
            MaterializedPath('3/5/9/')
        """
        if not ids:
            raise InvalidPathError("", "path is empty")
        return cls(
            "".join(f"{_segment(i, separator)}{separator}" for i in ids),
            separator=separator,
        )


__all__ = [
    "SEPARATOR",
    "MaterializedPath",
    "decode_ancestor_chain",
    "encode_child_path",
    "encode_root_path",
    "encode_sibling_path",
    "validate_path",
]
