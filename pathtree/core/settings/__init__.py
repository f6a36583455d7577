"""Modular Pydantic Settings v2 configuration.

Settings are split by concern (tree encoding, database, logging), each with
its own environment prefix, frozen once loaded and cached by the loaders:

    from pathtree.core.settings import get_tree_settings

    separator = get_tree_settings().separator

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .database import DatabaseSettings
from .loader import (
    clear_all_caches,
    get_db_settings,
    get_logging_settings,
    get_tree_settings,
)
from .logs import LoggingSettings
from .tree import TreeSettings
from .unified import Settings, get_settings

__all__ = [
    "DatabaseSettings",
    "LoggingSettings",
    "Settings",
    "TreeSettings",
    "clear_all_caches",
    "get_db_settings",
    "get_logging_settings",
    "get_settings",
    "get_tree_settings",
]
