"""Immutable path updates and deep merge."""

from smartclone.updates.models import ArrayStrategy, MergeOptions, UpdateOptions
from smartclone.updates.operations import (
    deep_merge,
    merge,
    update_all_at,
    update_at,
    update_multiple,
    update_nested,
)

__all__ = [
    # Operations
    "update_at",
    "update_all_at",
    "merge",
    # Aliases
    "update_nested",
    "update_multiple",
    "deep_merge",
    # Models
    "UpdateOptions",
    "MergeOptions",
    "ArrayStrategy",
]
