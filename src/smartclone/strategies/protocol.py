"""Clone strategy protocol for swappable algorithms.

A strategy is any object that can say whether it faithfully clones a value
and, if so, produce that clone. The clone engine walks an ordered list of
strategies and uses the first eligible one, so adding a strategy means
appending it to that list.

Usage:
    engine = CloneEngine(strategies=[MyStrategy(), RecursiveStrategy()])
"""

from __future__ import annotations

import math
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class CloneStrategy(Protocol):
    """Abstract clone algorithm. Implementations handle the actual copying."""

    name: str
    """Registry name used to force this strategy (``clone(v, strategy=name)``)."""

    supports_depth_cutoff: bool
    """Whether ``clone`` honours ``max_depth`` below the root."""

    def can_handle(self, value: Any) -> bool:
        """Report whether ``clone(value)`` would succeed and be faithful enough."""
        ...

    def clone(self, value: T, *, max_depth: float = math.inf, current_depth: int = 0) -> T:
        """Produce a deep copy of ``value``.

        Strategies that do not support a depth cutoff ignore the depth
        arguments and copy the whole graph.
        """
        ...
