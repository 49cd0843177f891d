"""Configuration settings using Pydantic Settings.

Library-wide defaults for clone, update and merge calls, overridable through
environment variables or a ``.env`` file.

Usage:
    from smartclone.config import get_settings

    # Load from environment variables (SMARTCLONE_*)
    settings = get_settings()

    # Or build explicitly
    settings = SmartCloneSettings(strategy="recursive", max_depth=3)
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class SmartCloneSettings(BaseSettings):  # type: ignore[misc]
    """Defaults applied when a call does not pass explicit options.

    Attributes:
        strategy: Default clone strategy (auto, structural, serialization, recursive).
        max_depth: Default cutoff depth (None for unbounded).
        array_strategy: Default merge policy for sequences (replace, merge).
        clone_on_update: Whether update_at/update_all_at clone before writing.
        log_level: Level used by enable_logging() when none is given.

    Environment Variables:
        SMARTCLONE_STRATEGY
        SMARTCLONE_MAX_DEPTH
        SMARTCLONE_ARRAY_STRATEGY
        SMARTCLONE_CLONE_ON_UPDATE
        SMARTCLONE_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="SMARTCLONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    strategy: str = "auto"
    max_depth: int | None = None
    array_strategy: str = "replace"
    clone_on_update: bool = True
    log_level: str = "WARNING"

    @field_validator("strategy", mode="before")
    @classmethod
    def _parse_strategy(cls, value: Any) -> str:
        # Late import to avoid circular dependency
        from smartclone.cloning.models import StrategyName

        return StrategyName.parse(value).value

    @field_validator("array_strategy", mode="before")
    @classmethod
    def _parse_array_strategy(cls, value: Any) -> str:
        from smartclone.updates.models import ArrayStrategy

        return ArrayStrategy(str(value).strip().lower()).value

    @field_validator("max_depth")
    @classmethod
    def _check_max_depth(cls, value: int | None) -> int | None:
        if value is not None and value < 0:
            raise ValueError("max_depth must be non-negative")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_log_level(cls, value: Any) -> str:
        level = str(value).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def effective_max_depth(self) -> float:
        return math.inf if self.max_depth is None else float(self.max_depth)


@lru_cache(maxsize=1)
def get_settings() -> SmartCloneSettings:
    """Process-wide settings, read from the environment once."""
    return SmartCloneSettings()


def reload_settings() -> SmartCloneSettings:
    """Drop the cached settings and read the environment again."""
    get_settings.cache_clear()
    return get_settings()
