"""Configuration module using Pydantic Settings.

Provides library-wide defaults with environment variable support.

Usage:
    from smartclone.config import SmartCloneSettings, get_settings

    settings = get_settings()
    settings = SmartCloneSettings(array_strategy="merge")
"""

from smartclone.config.settings import SmartCloneSettings, get_settings, reload_settings

__all__ = [
    "SmartCloneSettings",
    "get_settings",
    "reload_settings",
]
