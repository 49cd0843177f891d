"""Clone models and options.

Types naming the built-in strategies and configuring a single clone call.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from smartclone.errors import UnknownStrategyError


class StrategyName(StrEnum):
    """Registered clone strategies, plus ``AUTO`` for capability-based selection."""

    AUTO = "auto"
    """Try structural, then serialization, then recursive. Default."""

    STRUCTURAL = "structural"
    """Host deep-copy primitive. Faithful, preserves cycles."""

    SERIALIZATION = "serialization"
    """JSON round trip. Fast for plain data, lossy for everything else."""

    RECURSIVE = "recursive"
    """Identity-mapped recursive copy. Always available, honours depth cutoffs."""

    @classmethod
    def parse(cls, value: str | StrategyName) -> StrategyName:
        """Resolve a strategy name or alias.

        Raises:
            UnknownStrategyError: If ``value`` names no strategy.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            key = STRATEGY_ALIASES.get(key, key)
            try:
                return cls(key)
            except ValueError:
                pass
        raise UnknownStrategyError(value, tuple(member.value for member in cls))


STRATEGY_ALIASES: Final[dict[str, str]] = {
    "structured": StrategyName.STRUCTURAL.value,
    "json": StrategyName.SERIALIZATION.value,
}
"""Alternative spellings accepted wherever a strategy name is."""


@dataclass(frozen=True, slots=True)
class CloneOptions:
    """Configuration for one ``clone`` call.

    The strategy name is resolved lazily, so an unknown name surfaces as
    ``UnknownStrategyError`` from ``clone`` itself.
    """

    strategy: StrategyName | str = StrategyName.AUTO
    """Strategy to force, or ``auto``."""

    max_depth: float = math.inf
    """Cutoff depth. Nodes at this depth or deeper are shared, not copied."""

    current_depth: int = 0
    """Depth of the root value. Internal recursion counter, normally 0."""

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.current_depth < 0:
            raise ValueError(f"current_depth must be non-negative, got {self.current_depth}")

    @property
    def has_cutoff(self) -> bool:
        return not math.isinf(self.max_depth)
