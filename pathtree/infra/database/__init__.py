"""Database infrastructure: engine, sessions and transactions."""

from pathtree.infra.database.session import (
    close_database,
    create_engine,
    create_session_factory,
    get_async_session,
    get_engine,
    get_session_factory,
    transaction,
)

__all__ = [
    "close_database",
    "create_engine",
    "create_session_factory",
    "get_async_session",
    "get_engine",
    "get_session_factory",
    "transaction",
]
