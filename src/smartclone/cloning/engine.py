"""Strategy-selecting clone engine.

The engine owns an ordered fallback chain of strategies. In ``auto`` mode the
first strategy whose ``can_handle`` accepts the value produces the clone; a
named strategy is invoked directly with no fallback.

Selection trusts ``can_handle`` completely: if an eligible strategy still
fails in ``clone``, the error reaches the caller instead of triggering a
retry with the next strategy.

Usage:
    from smartclone import clone

    copy = clone(data)
    copy = clone(data, strategy="recursive", max_depth=2)
"""

from __future__ import annotations

import dataclasses
import warnings
from collections.abc import Iterable
from typing import Any, TypeVar

from loguru import logger

from smartclone.cloning.models import CloneOptions, StrategyName
from smartclone.config import get_settings
from smartclone.core.types import is_atomic
from smartclone.errors import UnavailableError, UnknownStrategyError
from smartclone.strategies import (
    CloneStrategy,
    RecursiveStrategy,
    SerializationStrategy,
    StructuralStrategy,
)

T = TypeVar("T")


def default_strategies() -> list[CloneStrategy]:
    """Built-in chain in preference order. Recursive is the terminal fallback."""
    return [StructuralStrategy(), SerializationStrategy(), RecursiveStrategy()]


def default_clone_options() -> CloneOptions:
    """Options built from the process settings (``SMARTCLONE_*``)."""
    settings = get_settings()
    return CloneOptions(strategy=settings.strategy, max_depth=settings.effective_max_depth)


def resolve_options(options: CloneOptions | None, overrides: dict[str, Any]) -> CloneOptions:
    """Merge explicit options and keyword overrides onto the configured defaults."""
    base = options if options is not None else default_clone_options()
    return dataclasses.replace(base, **overrides) if overrides else base


class CloneEngine:
    """Ordered chain of clone strategies plus the selection policy.

    Args:
        strategies: Chain in preference order. Defaults to structural,
            serialization, recursive.
    """

    def __init__(self, strategies: Iterable[CloneStrategy] | None = None):
        self._strategies: list[CloneStrategy] = (
            list(strategies) if strategies is not None else default_strategies()
        )

    @property
    def strategies(self) -> tuple[CloneStrategy, ...]:
        return tuple(self._strategies)

    @property
    def strategy_names(self) -> tuple[str, ...]:
        return tuple(strategy.name for strategy in self._strategies)

    def register(self, strategy: CloneStrategy, index: int | None = None) -> None:
        """Add a strategy to the chain, at the end unless ``index`` is given."""
        if not isinstance(strategy, CloneStrategy):
            raise TypeError(f"{type(strategy).__name__} does not implement CloneStrategy protocol")
        if index is None:
            self._strategies.append(strategy)
        else:
            self._strategies.insert(index, strategy)

    def get(self, name: str | StrategyName) -> CloneStrategy:
        """Look up a strategy by name or alias.

        Raises:
            UnknownStrategyError: If no strategy in the chain has that name.
        """
        for strategy in self._strategies:
            if strategy.name == name:
                return strategy
        resolved = StrategyName.parse(name)
        for strategy in self._strategies:
            if strategy.name == resolved.value:
                return strategy
        raise UnknownStrategyError(name, self.strategy_names)

    def select(self, value: Any, options: CloneOptions | None = None) -> CloneStrategy:
        """Pick the first strategy in the chain that can handle ``value``.

        With a finite depth cutoff only strategies able to honour it qualify.

        Raises:
            UnavailableError: If the chain has no eligible strategy.
        """
        needs_cutoff = options is not None and options.has_cutoff
        for strategy in self._strategies:
            if needs_cutoff and not strategy.supports_depth_cutoff:
                continue
            if strategy.can_handle(value):
                logger.debug("auto selected {} strategy for {}", strategy.name, type(value).__name__)
                return strategy
        raise UnavailableError(f"No strategy in {self.strategy_names} can clone {type(value).__name__}")

    def clone(self, value: T, options: CloneOptions | None = None, **overrides: Any) -> T:
        """Deep-copy ``value``.

        Args:
            value: Anything. Atomic values come back unchanged.
            options: Full option set. Defaults to the configured settings.
            **overrides: Individual ``CloneOptions`` fields, e.g.
                ``strategy="recursive"`` or ``max_depth=2``.

        Returns:
            The clone, or ``value`` itself when it is atomic or the cutoff is
            already reached at the root.

        Raises:
            UnknownStrategyError: If a forced strategy name is not registered.
            NonSerializableError: If forced serialization cannot round-trip.
            UnavailableError: If forced structural cloning has no host primitive.
        """
        options = resolve_options(options, overrides)

        if options.current_depth >= options.max_depth:
            logger.debug("depth cutoff at root (depth {})", options.current_depth)
            return value
        if is_atomic(value):
            return value

        if _is_auto(options.strategy):
            strategy = self.select(value, options)
        else:
            strategy = self.get(options.strategy)
            logger.debug("forced {} strategy for {}", strategy.name, type(value).__name__)
            if options.has_cutoff and not strategy.supports_depth_cutoff:
                warnings.warn(
                    f"{strategy.name} strategy cannot apply max_depth={options.max_depth} "
                    "below the root; the whole value is copied",
                    UserWarning,
                    stacklevel=2,
                )

        return strategy.clone(
            value, max_depth=options.max_depth, current_depth=options.current_depth
        )


def _is_auto(name: str | StrategyName) -> bool:
    return isinstance(name, str) and name.strip().lower() == StrategyName.AUTO.value


_default_engine = CloneEngine()


def get_default_engine() -> CloneEngine:
    """Engine used by the module-level ``clone`` function."""
    return _default_engine


def clone(value: T, options: CloneOptions | None = None, **overrides: Any) -> T:
    """Deep-copy ``value`` with the default engine. See ``CloneEngine.clone``."""
    return _default_engine.clone(value, options, **overrides)


deep_clone = clone
clone_deep = clone
