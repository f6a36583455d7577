"""Tests for composable statement filters."""

from __future__ import annotations

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import sqlite

from pathtree.core.database import (
    CollectionFilter,
    EqualsFilter,
    FilterGroup,
    IsNullFilter,
    OrderBy,
    PathPrefixFilter,
)
from tests.models import Category


def _sql(statement) -> str:
    return str(
        statement.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True})
    )


@pytest.mark.unit
class TestFilters:
    """Each filter adds the expected clause."""

    def test_equals(self):
        assert "categories.level = 2" in _sql(EqualsFilter(Category.level, 2).apply(select(Category)))

    def test_not_equals(self):
        sql = _sql(EqualsFilter(Category.id, 4, invert=True).apply(select(Category)))
        assert "categories.id != 4" in sql

    def test_is_null(self):
        assert "IS NULL" in _sql(IsNullFilter(Category.parent_id).apply(select(Category)))
        assert "IS NOT NULL" in _sql(
            IsNullFilter(Category.parent_id, invert=True).apply(select(Category))
        )

    def test_path_prefix_escapes_wildcards(self):
        sql = _sql(PathPrefixFilter(Category.path, "1_2%/").apply(select(Category)))

        assert "categories.path LIKE" in sql
        assert "ESCAPE '/'" in sql

    def test_path_prefix_compares_exact_substring(self):
        sql = _sql(PathPrefixFilter(Category.path, "1/2/").apply(select(Category)))

        assert "substr(categories.path, 1, 4) = '1/2/'" in sql

    def test_collection(self):
        sql = _sql(CollectionFilter(Category.id, [1, 2]).apply(select(Category)))
        assert "categories.id IN (1, 2)" in sql

    def test_empty_collection_matches_nothing(self):
        sql = _sql(CollectionFilter(Category.id, []).apply(select(Category)))
        assert "0 = 1" in sql or "false" in sql.lower()

    def test_empty_inverted_collection_is_noop(self):
        sql = _sql(CollectionFilter(Category.id, [], invert=True).apply(select(Category)))
        assert "WHERE" not in sql

    def test_order_by_multiple(self):
        sql = _sql(OrderBy([Category.level, Category.id], ["asc", "desc"]).apply(select(Category)))
        assert "ORDER BY categories.level ASC, categories.id DESC" in sql

    def test_order_by_length_mismatch(self):
        with pytest.raises(ValueError, match="sort_order length"):
            OrderBy([Category.level, Category.id], ["asc"])

    def test_group_combines_filters(self):
        sql = _sql(
            FilterGroup(
                [
                    IsNullFilter(Category.parent_id),
                    EqualsFilter(Category.level, 0),
                    OrderBy(Category.id),
                ]
            ).apply(select(Category))
        )

        assert "categories.parent_id IS NULL AND categories.level = 0" in sql
        assert "ORDER BY categories.id ASC" in sql
