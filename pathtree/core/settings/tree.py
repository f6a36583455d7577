"""Materialized-path tree settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class TreeSettings(BaseSettings):
    """Tree encoding and reconstruction configuration.

    Environment variables use TREE_ prefix.
    Example: TREE_SEPARATOR=/, TREE_PRESENTERS='{"summary": "app.presenters.Summary"}'
    """

    separator: str = Field(
        default="/",
        min_length=1,
        max_length=1,
        description="Path segment separator used by models that don't set __path_separator__.",
    )
    presenters: dict[str, str] = Field(
        default_factory=dict,
        description="Presenter names mapped to dotted import paths of callables.",
    )
    cascade_log_level: LogLevel = Field(
        default="DEBUG",
        description="Level used to log each descendant rewritten by a cascade.",
    )

    @field_validator("separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        """Reject separators that could appear inside ids or LIKE patterns."""
        if v.isalnum() or v in {"%", "_", "-"} or v.isspace():
            raise ValueError(f"separator {v!r} may collide with ids or LIKE wildcards")
        return v

    @field_validator("cascade_log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return v

    model_config = SettingsConfigDict(
        env_prefix="TREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @property
    def cascade_log_level_int(self) -> int:
        """Get numeric cascade log level."""
        import logging

        return getattr(logging, self.cascade_log_level, logging.DEBUG)
