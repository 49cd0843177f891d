"""Clone engine and options."""

from smartclone.cloning.models import STRATEGY_ALIASES, CloneOptions, StrategyName
from smartclone.cloning.engine import (
    CloneEngine,
    clone,
    clone_deep,
    deep_clone,
    default_clone_options,
    default_strategies,
    get_default_engine,
)

__all__ = [
    # Engine
    "CloneEngine",
    "get_default_engine",
    "default_strategies",
    "default_clone_options",
    # Operations
    "clone",
    "deep_clone",
    "clone_deep",
    # Models
    "CloneOptions",
    "StrategyName",
    "STRATEGY_ALIASES",
]
