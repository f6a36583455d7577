"""Unified settings composition for convenient access.

Usage:
    from pathtree.core.settings import get_settings

    settings = get_settings()
    print(settings.tree.separator)
    print(settings.db.dsn)

Each nested settings class still loads from its own environment prefix
(TREE_, DB_, LOG_).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .database import DatabaseSettings
from .logs import LoggingSettings
from .tree import TreeSettings


class Settings(BaseSettings):
    """Unified settings composing all domain settings.

    Example:
        settings = Settings()
        assert settings.tree.separator == "/"
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
    )

    tree: TreeSettings = Field(default_factory=TreeSettings)
    db: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get unified settings instance (cached)."""
    return Settings()
