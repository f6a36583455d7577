"""Errors raised while encoding, placing, or rebuilding tree nodes."""
from __future__ import annotations

from typing import Any

from pathtree.core.database.exceptions import RepositoryError


class TreeError(RepositoryError):
    """Base class for materialized-path tree errors."""


class InvalidPathError(TreeError):
    """A path (or an id being encoded into one) is malformed.

    Raised for empty paths, paths without a trailing separator, paths with
    empty segments, and ids that are missing or contain the separator.
    """

    def __init__(self, path: Any, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid materialized path: {reason}", details={"path": path})


class ParentNotPersistedError(TreeError):
    """The target parent has no id or no path yet."""

    def __init__(self, parent: Any):
        super().__init__(
            "Parent node must be saved and placed before children can be attached",
            details={
                "model": type(parent).__name__,
                "id": getattr(parent, "id", None),
                "path": getattr(parent, "path", None),
            },
        )


class SiblingNotPersistedError(TreeError):
    """The target sibling has no id or no path yet."""

    def __init__(self, sibling: Any):
        super().__init__(
            "Sibling node must be saved and placed before nodes can be placed next to it",
            details={
                "model": type(sibling).__name__,
                "id": getattr(sibling, "id", None),
                "path": getattr(sibling, "path", None),
            },
        )


class InvalidPlacementError(TreeError):
    """A placement would make a node its own ancestor."""

    def __init__(self, node: Any, target: Any):
        super().__init__(
            "Cannot place a node under itself or one of its descendants",
            details={
                "node_id": getattr(node, "id", None),
                "target_id": getattr(target, "id", None),
                "node_path": getattr(node, "path", None),
                "target_path": getattr(target, "path", None),
            },
        )


class OrphanNodeError(TreeError):
    """A node's parent was not seen before the node during tree rebuilding.

    The input to the tree builder must start with the root and be ordered by
    level ascending, so every parent precedes its children.
    """

    def __init__(self, node_id: Any, parent_id: Any):
        self.node_id = node_id
        self.parent_id = parent_id
        super().__init__(
            "Node references a parent that does not precede it in the input",
            details={"node_id": node_id, "parent_id": parent_id},
        )


class DuplicateNodeError(TreeError):
    """The same id appears more than once in the tree builder's input."""

    def __init__(self, node_id: Any):
        self.node_id = node_id
        super().__init__("Node appears more than once in the input", details={"node_id": node_id})


class UnknownTransformError(TreeError):
    """A presenter/transform name could not be resolved to a callable."""

    def __init__(self, name: Any, reason: str | None = None):
        self.name = name
        details: dict[str, Any] = {"transform": name}
        if reason:
            details["reason"] = reason
        super().__init__("No presenter found", details=details)


__all__ = [
    "DuplicateNodeError",
    "InvalidPathError",
    "InvalidPlacementError",
    "OrphanNodeError",
    "ParentNotPersistedError",
    "SiblingNotPersistedError",
    "TreeError",
    "UnknownTransformError",
]
