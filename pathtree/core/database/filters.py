"""Query filtering utilities for SQLAlchemy.

These filters work directly with SQLAlchemy statements without hiding the
query. They're utility helpers, not an abstraction layer; the tree query
builder composes them into the predicates it hands to the repository.

Usage:
    from sqlalchemy import select
    from pathtree.core.database.filters import OrderBy, PathPrefixFilter

    stmt = select(Category)
    stmt = PathPrefixFilter(Category.path, "3/5/").apply(stmt)
    stmt = OrderBy(Category.level, "asc").apply(stmt)

    result = await session.execute(stmt)
    descendants = result.scalars().all()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import Select, false, func

if TYPE_CHECKING:
    from sqlalchemy.orm import InstrumentedAttribute


class StatementFilter(ABC):
    """Base class for statement filters.

    All filters implement `apply()` which modifies a SQLAlchemy statement.
    """

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply filter to statement.

        Args:
            statement: SQLAlchemy select statement

        Returns:
            Modified select statement
        """
        ...


class EqualsFilter(StatementFilter):
    """Equality (or inequality) on a single column.

    Example:
        stmt = EqualsFilter(Category.parent_id, 5).apply(stmt)
        # WHERE category.parent_id = 5

        stmt = EqualsFilter(Category.id, 5, invert=True).apply(stmt)
        # WHERE category.id != 5
    """

    def __init__(self, field: InstrumentedAttribute[Any], value: Any, *, invert: bool = False):
        self.field = field
        self.value = value
        self.invert = invert

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply equality filter to statement."""
        if self.invert:
            return statement.where(self.field != self.value)
        return statement.where(self.field == self.value)


class IsNullFilter(StatementFilter):
    """NULL check on a single column.

    Example:
        stmt = IsNullFilter(Category.parent_id).apply(stmt)
        # WHERE category.parent_id IS NULL
    """

    def __init__(self, field: InstrumentedAttribute[Any], *, invert: bool = False):
        self.field = field
        self.invert = invert

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply NULL check to statement."""
        if self.invert:
            return statement.where(self.field.is_not(None))
        return statement.where(self.field.is_(None))


class PathPrefixFilter(StatementFilter):
    """Case-sensitive prefix match on a string column.

    LIKE narrows the scan and can use the column index; the SUBSTR
    comparison keeps the match exact on backends whose LIKE ignores case
    (SQLite by default). LIKE wildcards inside the prefix are escaped, so
    ids containing ``%`` or ``_`` match literally.

    Example:
        stmt = PathPrefixFilter(Category.path, "3/5/").apply(stmt)
        # WHERE category.path LIKE '3/5/' || '%' ESCAPE '/'
        #   AND substr(category.path, 1, 4) = '3/5/'
    """

    def __init__(self, field: InstrumentedAttribute[Any], prefix: str):
        self.field = field
        self.prefix = prefix

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply prefix match to statement."""
        return statement.where(
            self.field.startswith(self.prefix, autoescape=True),
            func.substr(self.field, 1, len(self.prefix)) == self.prefix,
        )


class CollectionFilter(StatementFilter):
    """Filter by collection (WHERE ... IN).

    Example:
        stmt = CollectionFilter(Category.id, [1, 2, 3]).apply(stmt)
        # WHERE category.id IN (1, 2, 3)

        stmt = CollectionFilter(Category.id, [4], invert=True).apply(stmt)
        # WHERE category.id NOT IN (4)
    """

    def __init__(
        self,
        field: InstrumentedAttribute[Any],
        values: Sequence[Any],
        *,
        invert: bool = False,
    ):
        """Initialize collection filter.

        Args:
            field: Field to filter
            values: Collection of values to match
            invert: If True, use NOT IN instead of IN
        """
        self.field = field
        self.values = list(values)
        self.invert = invert

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply collection filter to statement."""
        if not self.values:
            # Empty collection - return statement that matches nothing
            return statement.where(false()) if not self.invert else statement

        if self.invert:
            return statement.where(self.field.notin_(self.values))
        return statement.where(self.field.in_(self.values))


class OrderBy(StatementFilter):
    """Column ordering/sorting.

    Example:
        stmt = OrderBy(Category.level, "asc").apply(stmt)

        # Multiple orderings
        stmt = OrderBy([Category.level, Category.id], ["asc", "asc"]).apply(stmt)
    """

    def __init__(
        self,
        fields: InstrumentedAttribute[Any] | Sequence[InstrumentedAttribute[Any]],
        sort_order: Literal["asc", "desc"] | Sequence[Literal["asc", "desc"]] = "asc",
    ):
        """Initialize ordering filter.

        Args:
            fields: Single field or list of fields to order by
            sort_order: Sort direction(s) - 'asc' or 'desc'
        """
        self.fields = [fields] if not isinstance(fields, Sequence) else list(fields)

        if isinstance(sort_order, str):
            self.sort_orders = [sort_order] * len(self.fields)
        else:
            self.sort_orders = list(sort_order)
            if len(self.sort_orders) != len(self.fields):
                msg = "sort_order length must match fields length"
                raise ValueError(msg)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply ordering to statement."""
        for field, order in zip(self.fields, self.sort_orders, strict=False):
            if order == "desc":
                statement = statement.order_by(field.desc())
            else:
                statement = statement.order_by(field.asc())
        return statement


class FilterGroup(StatementFilter):
    """Apply several filters in sequence (AND semantics).

    Example:
        filters = FilterGroup([
            PathPrefixFilter(Category.path, node.path),
            EqualsFilter(Category.id, node.id, invert=True),
            OrderBy(Category.level),
        ])
        stmt = filters.apply(select(Category))
    """

    def __init__(self, filters: Sequence[StatementFilter]):
        """Initialize filter group.

        Args:
            filters: Filters to apply, in order
        """
        self.filters = list(filters)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply all filters to statement."""
        for filter_obj in self.filters:
            statement = filter_obj.apply(statement)
        return statement


__all__ = [
    "CollectionFilter",
    "EqualsFilter",
    "FilterGroup",
    "IsNullFilter",
    "OrderBy",
    "PathPrefixFilter",
    "StatementFilter",
]
