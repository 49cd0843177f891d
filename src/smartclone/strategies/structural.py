"""Structural clone backed by the host's native deep-copy primitive.

In CPython the primitive is ``copy.deepcopy``: it preserves cycles and shared
references and understands dates, compiled patterns, dict subclasses and sets
natively. Its presence is detected through a probe at every call rather than
assumed, so an environment without it degrades to the next strategy.

``copy.deepcopy`` hands back tuples and frozensets of atoms, and compiled
patterns, as the very same objects. The primitive's memo is seeded with fresh
copies of those so every container in the result is a distinct instance, as
with the other strategies.

``can_handle`` attempts the copy, so calling ``can_handle`` and then
``clone`` copies the value twice.
"""

from __future__ import annotations

import copy
import math
import re
from collections.abc import Callable
from typing import Any, Final, TypeVar, cast

from loguru import logger

from smartclone.core.types import MISSING, ValueKind, children, kind_of
from smartclone.errors import UnavailableError

T = TypeVar("T")

Primitive = Callable[[Any, dict[int, Any]], Any]

_SHARED_KINDS: Final = frozenset({ValueKind.ATOMIC, ValueKind.CALLABLE})

_COPY_ERRORS: Final = (TypeError, ValueError, AttributeError, RecursionError, copy.Error)
"""Raised by ``copy.deepcopy`` for values it cannot reproduce (locks, generators, ...)."""


def find_structural_primitive() -> Primitive | None:
    """Capability probe: return the host structural-clone primitive, if any."""
    primitive = getattr(copy, "deepcopy", None)
    return primitive if callable(primitive) else None


def fresh_immutables(value: Any) -> dict[int, Any]:
    """Fresh copies of the immutable containers in ``value``, keyed by identity.

    Covers exact tuples and frozensets holding only atomic or callable items,
    and compiled patterns. Larger immutable containers need no entry: once
    their items are fresh the primitive rebuilds them itself.
    """
    fresh: dict[int, Any] = {}
    visited: set[int] = set()
    pending = [value]
    while pending:
        current = pending.pop()
        kind = kind_of(current)
        if kind in _SHARED_KINDS or id(current) in visited:
            continue
        visited.add(id(current))
        if kind is ValueKind.PATTERN:
            fresh[id(current)] = re.compile(current.pattern, current.flags)
            continue
        items = list(children(current))
        if type(current) in (tuple, frozenset) and all(kind_of(item) in _SHARED_KINDS for item in items):
            fresh[id(current)] = type(current)(items)
            continue
        pending.extend(items)
    return fresh


class StructuralStrategy:
    """Delegate to the host structural-clone primitive.

    Args:
        probe: Callable returning the primitive or ``None`` when unavailable.
            Defaults to ``find_structural_primitive``. The primitive is called
            as ``primitive(value, memo)``.
    """

    name = "structural"
    supports_depth_cutoff = False

    def __init__(self, probe: Callable[[], Primitive | None] = find_structural_primitive):
        self._probe = probe

    def can_handle(self, value: Any = MISSING) -> bool:
        """True when the primitive is present and can copy ``value``.

        Without a value only the environment is checked.
        """
        primitive = self._probe()
        if primitive is None:
            return False
        if value is MISSING:
            return True
        try:
            self._copy(primitive, value)
        except _COPY_ERRORS as e:
            logger.debug("structural probe rejected {}: {}", type(value).__name__, e)
            return False
        return True

    def clone(self, value: T, *, max_depth: float = math.inf, current_depth: int = 0) -> T:
        """Clone ``value`` with the host primitive.

        Raises:
            UnavailableError: If the probe finds no primitive.
        """
        primitive = self._probe()
        if primitive is None:
            raise UnavailableError("Structural clone primitive is not available in this environment")
        logger.debug("structural clone of {}", type(value).__name__)
        return cast(T, self._copy(primitive, value))

    @staticmethod
    def _copy(primitive: Primitive, value: Any) -> Any:
        return primitive(value, fresh_immutables(value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
