"""smartclone: deep cloning and immutable nested updates for Python object graphs.

Usage:
    from smartclone import clone, merge, update_at

    config = {"database": {"host": "localhost", "pool": {"max": 10}}}

    copy = clone(config)                      # auto strategy selection
    bigger = update_at(config, "database.pool.max", 50)
    prod = merge(config, {"database": {"host": "prod-db"}})

    node = {"name": "root"}
    node["self"] = node
    twin = clone(node)
    assert twin["self"] is twin               # cycles are preserved
"""

__version__ = "1.0.0"

from loguru import logger

# Cloning
from smartclone.cloning import (
    CloneEngine,
    CloneOptions,
    StrategyName,
    clone,
    clone_deep,
    deep_clone,
    get_default_engine,
)

# Configuration
from smartclone.config import SmartCloneSettings, get_settings, reload_settings

# Predicates and paths
from smartclone.core import (
    MISSING,
    ValueKind,
    contains_cycle,
    get_path,
    has_path,
    is_associative_map,
    is_atomic,
    is_keyed_container,
    is_mapping,
    is_pattern,
    is_sequence,
    is_temporal,
    is_unique_set,
    kind_of,
    parse_path,
    set_path,
)

# Errors
from smartclone.errors import (
    InvalidPathError,
    InvalidTargetError,
    NonSerializableError,
    SmartCloneError,
    UnavailableError,
    UnknownStrategyError,
)

# Logging
from smartclone.log import disable_logging, enable_logging

# Strategies
from smartclone.strategies import (
    CloneStrategy,
    RecursiveStrategy,
    SerializationStrategy,
    StructuralStrategy,
)

# Updates
from smartclone.updates import (
    ArrayStrategy,
    MergeOptions,
    UpdateOptions,
    deep_merge,
    merge,
    update_all_at,
    update_at,
    update_multiple,
    update_nested,
)

logger.disable("smartclone")

__all__ = [
    # Version
    "__version__",
    # Cloning
    "clone",
    "deep_clone",
    "clone_deep",
    "CloneEngine",
    "CloneOptions",
    "StrategyName",
    "get_default_engine",
    # Strategies
    "CloneStrategy",
    "StructuralStrategy",
    "SerializationStrategy",
    "RecursiveStrategy",
    # Updates
    "update_at",
    "update_all_at",
    "merge",
    "update_nested",
    "update_multiple",
    "deep_merge",
    "UpdateOptions",
    "MergeOptions",
    "ArrayStrategy",
    # Predicates
    "ValueKind",
    "kind_of",
    "is_atomic",
    "is_sequence",
    "is_mapping",
    "is_associative_map",
    "is_unique_set",
    "is_temporal",
    "is_pattern",
    "is_keyed_container",
    "contains_cycle",
    # Paths
    "MISSING",
    "parse_path",
    "has_path",
    "get_path",
    "set_path",
    # Errors
    "SmartCloneError",
    "UnknownStrategyError",
    "NonSerializableError",
    "UnavailableError",
    "InvalidTargetError",
    "InvalidPathError",
    # Configuration
    "SmartCloneSettings",
    "get_settings",
    "reload_settings",
    # Logging
    "enable_logging",
    "disable_logging",
]
