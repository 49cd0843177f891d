"""Recursive clone: the universal fallback.

Depth-first copy driven by an identity map from source object to clone. The
map is created per top-level call and every mutable container is registered
in it *before* its children are visited, which is what makes cycles
terminate and keeps shared sub-objects shared in the copy.

Immutable containers (tuples, frozensets, bytearrays rebuilt from their
items) cannot be registered before they exist, so they are built after their
children and then reconciled with the map, the same way ``copy.deepcopy``
handles tuples.

Objects whose class supplies its own reduction (exceptions, most C types) are
rebuilt from ``__reduce_ex__`` so state held outside ``__dict__`` survives.
"""

from __future__ import annotations

import math
import re
from collections import defaultdict, deque
from typing import Any, TypeVar, assert_never, cast

from loguru import logger

from smartclone.core.types import ValueKind, composite_fields, kind_of

T = TypeVar("T")


def _clone_temporal(value: Any) -> Any:
    # date/time/datetime reduce to (class, state); rebuilding gives an equal, distinct instance
    factory, args = value.__reduce__()[:2]
    return factory(*args)


def _clone_pattern(value: re.Pattern[Any]) -> re.Pattern[Any]:
    return re.compile(value.pattern, value.flags)


def _new_instance(cls: type) -> Any:
    try:
        return cls()
    except TypeError:
        return cls.__new__(cls)


def _reduces_itself(cls: type) -> bool:
    return cls.__reduce_ex__ is not object.__reduce_ex__ or cls.__reduce__ is not object.__reduce__


class _Cloner:
    """State for one top-level clone call.

    Args:
        max_depth: Nodes at this depth or deeper are shared, not copied.
    """

    def __init__(self, max_depth: float):
        self._max_depth = max_depth
        self._seen: dict[int, Any] = {}
        self._alive: list[Any] = []

    def clone(self, value: Any, depth: int) -> Any:
        kind = kind_of(value)
        match kind:
            case ValueKind.ATOMIC | ValueKind.CALLABLE:
                return value
            case _ if depth >= self._max_depth:
                return value
            case _ if id(value) in self._seen:
                return self._seen[id(value)]
            case ValueKind.TEMPORAL:
                return _clone_temporal(value)
            case ValueKind.PATTERN:
                return _clone_pattern(value)
            case ValueKind.SEQUENCE:
                return self._clone_sequence(value, depth)
            case ValueKind.MAPPING:
                return self._fill_mapping(value, self._register(value, {}), depth)
            case ValueKind.ASSOCIATIVE_MAP:
                return self._clone_associative_map(value, depth)
            case ValueKind.UNIQUE_SET:
                return self._clone_set(value, depth)
            case ValueKind.COMPOSITE:
                return self._clone_composite(value, depth)
            case _:
                assert_never(kind)

    def _register(self, source: Any, copy: T) -> T:
        self._seen[id(source)] = copy
        return copy

    def _rebuild(self, source: Any, items: list[Any], build: Any) -> Any:
        # A child may have reached `source` through a cycle and built it already
        if id(source) in self._seen:
            return self._seen[id(source)]
        return self._register(source, build(items))

    def _clone_sequence(self, value: Any, depth: int) -> Any:
        if isinstance(value, list):
            out: list[Any] = self._register(value, [])
            for item in value:
                out.append(self.clone(item, depth + 1))
            return out
        if isinstance(value, deque):
            dq: deque[Any] = self._register(value, deque(maxlen=value.maxlen))
            for item in value:
                dq.append(self.clone(item, depth + 1))
            return dq

        items = [self.clone(item, depth + 1) for item in value]
        cls = type(value)
        if isinstance(value, tuple) and hasattr(cls, "_fields"):
            return self._rebuild(value, items, cls._make)
        return self._rebuild(value, items, cls)

    def _fill_mapping(self, source: Any, out: Any, depth: int) -> Any:
        for key, item in source.items():
            out[self.clone(key, depth + 1)] = self.clone(item, depth + 1)
        return out

    def _clone_associative_map(self, value: dict[Any, Any], depth: int) -> Any:
        if isinstance(value, defaultdict):
            out = type(value)(value.default_factory)
        else:
            out = _new_instance(type(value))
        self._register(value, out)
        self._fill_mapping(value, out, depth)
        self._fill_fields(value, out, depth)
        return out

    def _clone_set(self, value: Any, depth: int) -> Any:
        if isinstance(value, frozenset):
            items = [self.clone(item, depth + 1) for item in value]
            return self._rebuild(value, items, type(value))
        out = self._register(value, _new_instance(type(value)))
        for item in value:
            out.add(self.clone(item, depth + 1))
        return out

    def _clone_composite(self, value: Any, depth: int) -> Any:
        cls = type(value)
        if _reduces_itself(cls):
            try:
                reduced = value.__reduce_ex__(4)
            except TypeError:
                reduced = None
            if reduced is not None:
                return self._clone_reduced(value, reduced, depth)
        fields = composite_fields(value)
        try:
            out = cls.__new__(cls)
        except TypeError:
            if fields:
                raise
            # Opaque handle (lock, generator, ...): nothing to copy, share it
            logger.debug("sharing uninstantiable {} by reference", cls.__name__)
            return self._register(value, value)
        self._register(value, out)
        self._fill_fields(value, out, depth, fields)
        return out

    def _clone_reduced(self, value: Any, reduced: Any, depth: int) -> Any:
        """Rebuild ``value`` from its ``__reduce_ex__`` result, like ``copy._reconstruct``."""
        if isinstance(reduced, str):
            # Module-level singleton
            return self._register(value, value)
        # Transient parts of the reduction are registered by id; keep them alive
        self._alive.append(reduced)
        factory, args, state, list_items, dict_items = (*reduced, None, None, None)[:5]
        out = factory(*[self.clone(arg, depth + 1) for arg in args])
        self._register(value, out)
        if state is not None:
            state = self.clone(state, depth)
            if hasattr(out, "__setstate__"):
                out.__setstate__(state)
            else:
                slot_state = None
                if isinstance(state, tuple) and len(state) == 2:
                    state, slot_state = state
                for name, item in {**(state or {}), **(slot_state or {})}.items():
                    object.__setattr__(out, name, item)
        if list_items is not None:
            for item in list_items:
                out.append(self.clone(item, depth + 1))
        if dict_items is not None:
            for key, item in dict_items:
                out[self.clone(key, depth + 1)] = self.clone(item, depth + 1)
        return out

    def _fill_fields(
        self, source: Any, out: Any, depth: int, fields: dict[str, Any] | None = None
    ) -> None:
        if fields is None:
            fields = composite_fields(source)
        for name, item in fields.items():
            object.__setattr__(out, name, self.clone(item, depth + 1))


class RecursiveStrategy:
    """Identity-mapped depth-first clone. Always eligible."""

    name = "recursive"
    supports_depth_cutoff = True

    def can_handle(self, value: Any = None) -> bool:
        return True

    def clone(self, value: T, *, max_depth: float = math.inf, current_depth: int = 0) -> T:
        """Clone ``value``, reproducing its sharing and cycle topology.

        Args:
            value: Root of the graph to copy.
            max_depth: Cutoff depth; nodes at ``max_depth`` or deeper are
                returned by reference.
            current_depth: Depth assigned to the root.
        """
        return cast(T, _Cloner(max_depth).clone(value, current_depth))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
