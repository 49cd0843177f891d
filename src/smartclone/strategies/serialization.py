"""Serialization clone: a JSON text round trip.

Fast for plain data, and deliberately lossy for everything else. The
conversion applied before encoding follows JSON.stringify conventions:

- callables (and ``MISSING``) are dropped from mappings and become ``null``
  inside sequences
- dates and times become ISO-8601 strings
- compiled patterns, dict subclasses and sets become empty objects
- plain objects become the mapping of their fields
- tuples become lists; NaN and infinities become ``null``

A cycle, or an atom JSON has no spelling for (``bytes``, ``Decimal``, plain
``Enum`` members, ...), makes serialization raise. ``can_handle`` *is* that
serialization attempt, so calling ``can_handle`` and then ``clone`` encodes
the value twice.
"""

from __future__ import annotations

import json
import math
from typing import Any, Final, TypeVar, cast

from loguru import logger

from smartclone.core.types import MISSING, ValueKind, composite_fields, kind_of
from smartclone.errors import NonSerializableError

T = TypeVar("T")

_DROP: Final = object()
"""Marks values JSON.stringify would omit (undefined)."""

_JSON_SCALARS: Final[tuple[type, ...]] = (str, int, float)


def _prepare_atomic(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return value
    if value is MISSING:
        return _DROP
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, _JSON_SCALARS):
        # Covers IntEnum / StrEnum members as well
        return value
    raise NonSerializableError(f"Value of type {type(value).__name__} is not JSON serializable")


def _prepare_fields(items: Any, ancestors: set[int]) -> dict[Any, Any]:
    out: dict[Any, Any] = {}
    for key, item in items:
        prepared = to_json_compatible(item, ancestors)
        if prepared is not _DROP:
            out[key] = prepared
    return out


def to_json_compatible(value: Any, ancestors: set[int] | None = None) -> Any:
    """Convert ``value`` into plain JSON data, applying the lossy rules above.

    Returns the private drop marker for values that have no JSON spelling and
    would be omitted by JSON.stringify.

    Raises:
        NonSerializableError: On a cycle or an unencodable atom.
    """
    if ancestors is None:
        ancestors = set()

    kind = kind_of(value)
    if kind is ValueKind.ATOMIC:
        return _prepare_atomic(value)
    if kind is ValueKind.CALLABLE:
        return _DROP
    if kind is ValueKind.TEMPORAL:
        return value.isoformat()
    if kind in (ValueKind.PATTERN, ValueKind.ASSOCIATIVE_MAP, ValueKind.UNIQUE_SET):
        return {}

    marker = id(value)
    if marker in ancestors:
        raise NonSerializableError("Converting circular structure to JSON")
    ancestors.add(marker)
    try:
        if kind is ValueKind.SEQUENCE:
            out = []
            for item in value:
                prepared = to_json_compatible(item, ancestors)
                out.append(None if prepared is _DROP else prepared)
            return out
        if kind is ValueKind.MAPPING:
            return _prepare_fields(value.items(), ancestors)
        return _prepare_fields(composite_fields(value).items(), ancestors)
    finally:
        ancestors.discard(marker)


class SerializationStrategy:
    """Clone by encoding to JSON text and decoding it again."""

    name = "serialization"
    supports_depth_cutoff = False

    def _serialize(self, value: Any) -> str:
        try:
            prepared = to_json_compatible(value)
            if prepared is _DROP:
                raise NonSerializableError(f"{type(value).__name__} has no JSON representation")
            return json.dumps(prepared, allow_nan=False)
        except NonSerializableError:
            raise
        except (TypeError, ValueError, RecursionError) as e:
            raise NonSerializableError(f"Object contains non-serializable values: {e}") from e

    def can_handle(self, value: Any) -> bool:
        """Probe by serializing ``value``. False if serialization raises."""
        try:
            self._serialize(value)
        except NonSerializableError:
            return False
        return True

    def clone(self, value: T, *, max_depth: float = math.inf, current_depth: int = 0) -> T:
        """Serialize then deserialize ``value``.

        Raises:
            NonSerializableError: If ``value`` cannot round-trip.
        """
        text = self._serialize(value)
        logger.debug("serialization clone of {} ({} chars)", type(value).__name__, len(text))
        return cast(T, json.loads(text))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
