"""Tests for the repository and tree error hierarchy."""

from __future__ import annotations

import pytest

from pathtree.core.database import RepositoryError, StoreFailureError
from pathtree.core.database.hierarchy import (
    DuplicateNodeError,
    InvalidPathError,
    InvalidPlacementError,
    OrphanNodeError,
    ParentNotPersistedError,
    SiblingNotPersistedError,
    TreeError,
    UnknownTransformError,
)
from tests.models import Category


@pytest.mark.unit
class TestHierarchy:
    """Every tree error is a RepositoryError carrying details."""

    @pytest.mark.parametrize(
        "error",
        [
            InvalidPathError("3/5", "path must end with '/'"),
            ParentNotPersistedError(Category(name="p")),
            SiblingNotPersistedError(Category(name="s")),
            InvalidPlacementError(Category(id=1, path="1/"), Category(id=2, path="1/2/")),
            OrphanNodeError(4, 9),
            DuplicateNodeError(4),
            UnknownTransformError("summary"),
        ],
    )
    def test_tree_errors(self, error):
        assert isinstance(error, TreeError)
        assert isinstance(error, RepositoryError)
        assert error.details
        assert str(error).startswith(error.message)

    def test_store_failure(self):
        error = StoreFailureError("db.save", "Category", "IntegrityError")

        assert error.operation == "db.save"
        assert str(error) == (
            "Store operation failed for Category "
            "(operation='db.save', model='Category', reason='IntegrityError')"
        )

    def test_message_without_details(self):
        assert str(RepositoryError("boom")) == "boom"

    def test_placement_error_details(self):
        error = InvalidPlacementError(Category(id=1, path="1/"), Category(id=2, path="1/2/"))

        assert error.details["node_id"] == 1
        assert error.details["target_id"] == 2
