"""Hierarchical data support using materialized paths.

Each row stores its full ancestor chain as a delimited string such as
"3/5/9/", along with its ``parent_id`` and ``level``. Subtree and ancestor
lookups become a prefix match and an ``IN`` match, so the scheme works on
any SQL backend (SQLite, PostgreSQL, MySQL).

Components:
    - MaterializedPath: Python wrapper for path manipulation and navigation
    - MaterializedPathMixin: Mixin for models with tree operations
    - TreeRepository: Store collaborator with lifecycle hooks
    - set_as_root / set_child_of / set_sibling_of: Placement with cascade
    - build_complete_tree / assemble_tree: Flat rows to nested tree
    - presenter_registry: Named transforms applied while building trees

Example:
    >>> from pathtree.core.database import Base, IntegerPKMixin
    >>> from pathtree.core.database.hierarchy import MaterializedPathMixin
    >>>
    >>> class Category(Base, IntegerPKMixin, MaterializedPathMixin):
    ...     __tablename__ = "categories"
    ...     name: Mapped[str] = mapped_column(String(255))
    >>>
    >>> root = await Category(name="Electronics").set_as_root(session)
    >>> child = await Category(name="Computers").set_child_of(session, root)
    >>> child.path
    '1/2/'
    >>> tree = await Category.get_tree(session, root.id)
"""

from pathtree.core.database.hierarchy.builder import (
    assemble_tree,
    build_complete_tree,
)
from pathtree.core.database.hierarchy.cascade import propagate
from pathtree.core.database.hierarchy.exceptions import (
    DuplicateNodeError,
    InvalidPathError,
    InvalidPlacementError,
    OrphanNodeError,
    ParentNotPersistedError,
    SiblingNotPersistedError,
    TreeError,
    UnknownTransformError,
)
from pathtree.core.database.hierarchy.mixins import MaterializedPathMixin
from pathtree.core.database.hierarchy.path import (
    SEPARATOR,
    MaterializedPath,
    decode_ancestor_chain,
    encode_child_path,
    encode_root_path,
    encode_sibling_path,
    validate_path,
)
from pathtree.core.database.hierarchy.placement import (
    set_as_root,
    set_child_of,
    set_sibling_of,
)
from pathtree.core.database.hierarchy.presenters import (
    Presenter,
    PresenterRegistry,
    presenter_registry,
)
from pathtree.core.database.hierarchy.repository import (
    HOOK_EVENTS,
    Hook,
    HookEvent,
    TreeRepository,
)

__all__ = [
    "HOOK_EVENTS",
    "SEPARATOR",
    "DuplicateNodeError",
    "Hook",
    "HookEvent",
    "InvalidPathError",
    "InvalidPlacementError",
    "MaterializedPath",
    "MaterializedPathMixin",
    "OrphanNodeError",
    "ParentNotPersistedError",
    "Presenter",
    "PresenterRegistry",
    "SiblingNotPersistedError",
    "TreeError",
    "TreeRepository",
    "UnknownTransformError",
    "assemble_tree",
    "build_complete_tree",
    "decode_ancestor_chain",
    "encode_child_path",
    "encode_root_path",
    "encode_sibling_path",
    "presenter_registry",
    "propagate",
    "set_as_root",
    "set_child_of",
    "set_sibling_of",
    "validate_path",
]
