"""Core database package: declarative base, mixins, repository and filters.

Base Classes and Mixins:
    - Base: Declarative base with auto table naming
    - IntegerPKMixin, UUIDPKMixin: Primary key strategies
    - MaterializedPathMixin: Tree storage and navigation (see ``hierarchy``)

Repository:
    - TreeRepository[T]: Tree store with post-save/post-delete hooks

Query Filters:
    - EqualsFilter, IsNullFilter: Column comparisons
    - PathPrefixFilter: LIKE 'prefix%' with wildcard escaping
    - CollectionFilter: WHERE ... IN clauses
    - OrderBy: Column sorting (asc/desc)
    - FilterGroup: Combine multiple filters

Exceptions:
    - RepositoryError: Base exception for database operations
    - StoreFailureError: Underlying store failed
"""

from pathtree.core.database.base import (
    NAMING_CONVENTION,
    Base,
    IntegerPKMixin,
    UUIDPKMixin,
)
from pathtree.core.database.exceptions import (
    RepositoryError,
    StoreFailureError,
)
from pathtree.core.database.filters import (
    CollectionFilter,
    EqualsFilter,
    FilterGroup,
    IsNullFilter,
    OrderBy,
    PathPrefixFilter,
    StatementFilter,
)
from pathtree.core.database.hierarchy import (
    MaterializedPathMixin,
    TreeRepository,
)

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "CollectionFilter",
    "EqualsFilter",
    "FilterGroup",
    "IntegerPKMixin",
    "IsNullFilter",
    "MaterializedPathMixin",
    "OrderBy",
    "PathPrefixFilter",
    "RepositoryError",
    "StatementFilter",
    "StoreFailureError",
    "TreeRepository",
    "UUIDPKMixin",
]
