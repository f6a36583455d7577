"""Database repository exceptions.

Custom exceptions for repository operations that provide better
error messages and typing than raw SQLAlchemy exceptions.
"""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for repository operations.

    Raised when a repository operation fails due to programming
    errors, configuration issues, or unexpected states.

    Tree errors and store failures both derive from it.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize repository error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class StoreFailureError(RepositoryError):
    """The underlying store rejected an operation.

    Wraps the SQLAlchemy error raised by the session; the original
    exception is always available as ``__cause__``.

    Attributes:
        operation: Repository operation that failed (e.g., "db.save")
        model_name: Name of the model the operation targeted
    """

    def __init__(self, operation: str, model_name: str, reason: str | None = None):
        """Initialize store failure.

        Args:
            operation: Repository operation name
            model_name: Name of the model
            reason: Short description of the underlying error
        """
        self.operation = operation
        self.model_name = model_name
        details: dict[str, Any] = {"operation": operation, "model": model_name}
        if reason:
            details["reason"] = reason
        super().__init__(f"Store operation failed for {model_name}", details=details)


__all__ = [
    "RepositoryError",
    "StoreFailureError",
]
