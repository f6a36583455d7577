"""Base database model classes with composable mixins.

This module provides the foundation for SQLAlchemy models with:
- Integer or UUID primary keys
- Automatic table name generation

Models mix and match capabilities by inheriting from specific mixins,
typically together with ``MaterializedPathMixin`` for tree support.

Examples:
    Integer-keyed tree model:
    class Category(Base, IntegerPKMixin, MaterializedPathMixin):
        __tablename__ = "categories"
        name: Mapped[str] = mapped_column(String(255))

    UUID-keyed tree model:
    class Folder(Base, UUIDPKMixin, MaterializedPathMixin):
        __tablename__ = "folders"
        title: Mapped[str] = mapped_column(String(255))
"""

from __future__ import annotations

import uuid
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

# Consistent naming convention for database constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base with automatic table naming.

    Provides:
    - Consistent constraint naming via NAMING_CONVENTION
    - Automatic table name generation from class name (lowercase)
    - Metadata registry for all models

    The automatic table naming can be overridden by setting __tablename__
    explicitly on the model class.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        """Auto-derive table name from class name (lowercase).

        Examples:
            Category -> category
            MenuItem -> menuitem

        For plural or snake_case table names, override __tablename__ explicitly.
        """
        return cls.__name__.lower()


# ============================================================================
# Primary Key Mixins
# ============================================================================


class IntegerPKMixin:
    """Integer auto-increment primary key.

    Integer ids make short, readable paths ("3/5/9/").

    Provides:
        id: Auto-incrementing integer primary key
    """

    __allow_unmapped__ = True

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing integer primary key",
    )


class UUIDPKMixin:
    """UUID v4 primary key.

    Each path segment is 36 characters, so deep trees need a wider
    path column than the default.

    Provides:
        id: UUID v4 primary key (random)
    """

    __allow_unmapped__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
        comment="UUID v4 primary key",
    )


__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "IntegerPKMixin",
    "UUIDPKMixin",
]
