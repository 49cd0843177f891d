"""Value classification and type predicates.

Every value handled by smartclone belongs to exactly one ``ValueKind``.
``kind_of`` is the single place where that decision is made; the predicates
below are thin views over it, and the recursive strategy matches on it
exhaustively.

All functions here are pure and total: they never raise, whatever they are
given.
"""

from __future__ import annotations

import datetime
import functools
import re
import types
import uuid
from collections import deque
from collections.abc import Iterator, Mapping
from decimal import Decimal
from enum import Enum, auto
from fractions import Fraction
from pathlib import PurePath
from typing import Any, Final


class _Missing:
    """Sentinel type for "no value here", distinct from ``None``."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()
"""Marks an absent value. ``get_path`` treats it like a missing key."""


class ValueKind(Enum):
    """Closed set of value shapes the clone machinery distinguishes."""

    ATOMIC = auto()  # Immutable scalar, returned by identity
    CALLABLE = auto()  # Function, class or module, shared by reference
    SEQUENCE = auto()  # list, tuple, deque, bytearray
    MAPPING = auto()  # Plain dict
    TEMPORAL = auto()  # date, time, datetime
    PATTERN = auto()  # Compiled regular expression
    ASSOCIATIVE_MAP = auto()  # dict subclass (OrderedDict, defaultdict, ...)
    UNIQUE_SET = auto()  # set, frozenset
    COMPOSITE = auto()  # Anything else: an object with fields


ATOMIC_TYPES: Final[tuple[type, ...]] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    uuid.UUID,
    datetime.timedelta,
    range,
    slice,
    PurePath,
    Enum,
    _Missing,
    types.EllipsisType,
    types.NotImplementedType,
)

CALLABLE_TYPES: Final[tuple[type, ...]] = (
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.ModuleType,
    functools.partial,
)

SEQUENCE_TYPES: Final[tuple[type, ...]] = (list, tuple, deque, bytearray)
TEMPORAL_TYPES: Final[tuple[type, ...]] = (datetime.date, datetime.time)
SET_TYPES: Final[tuple[type, ...]] = (set, frozenset)

LEAF_KINDS: Final = frozenset(
    {ValueKind.ATOMIC, ValueKind.CALLABLE, ValueKind.TEMPORAL, ValueKind.PATTERN}
)
"""Kinds that never contain other values."""


def kind_of(value: Any) -> ValueKind:
    """Classify a value.

    Order matters: ``bool``/``IntEnum`` are ints, ``datetime`` is a ``date``
    and ``OrderedDict`` is a ``dict``, so the most specific checks come first.
    """
    if value is None or isinstance(value, ATOMIC_TYPES):
        return ValueKind.ATOMIC
    if isinstance(value, TEMPORAL_TYPES):
        return ValueKind.TEMPORAL
    if isinstance(value, re.Pattern):
        return ValueKind.PATTERN
    if type(value) is dict:
        return ValueKind.MAPPING
    if isinstance(value, dict):
        return ValueKind.ASSOCIATIVE_MAP
    if isinstance(value, SEQUENCE_TYPES):
        return ValueKind.SEQUENCE
    if isinstance(value, SET_TYPES):
        return ValueKind.UNIQUE_SET
    if isinstance(value, CALLABLE_TYPES):
        return ValueKind.CALLABLE
    return ValueKind.COMPOSITE


def is_atomic(value: Any) -> bool:
    """True for values that never need cloning (``None`` included)."""
    return kind_of(value) is ValueKind.ATOMIC


def is_callable_value(value: Any) -> bool:
    return kind_of(value) is ValueKind.CALLABLE


def is_sequence(value: Any) -> bool:
    """True for ordered, index-addressed containers (not str/bytes)."""
    return kind_of(value) is ValueKind.SEQUENCE


def is_mapping(value: Any) -> bool:
    """True for any key/value container. Sequences never qualify."""
    return isinstance(value, Mapping)


def is_associative_map(value: Any) -> bool:
    return kind_of(value) is ValueKind.ASSOCIATIVE_MAP


def is_unique_set(value: Any) -> bool:
    return kind_of(value) is ValueKind.UNIQUE_SET


def is_temporal(value: Any) -> bool:
    return kind_of(value) is ValueKind.TEMPORAL


def is_pattern(value: Any) -> bool:
    return kind_of(value) is ValueKind.PATTERN


def is_keyed_container(value: Any) -> bool:
    """True for values addressable by path segments.

    Mappings are keyed by their keys, lists by integer index and composite
    objects by attribute name.
    """
    return isinstance(value, (Mapping, list)) or kind_of(value) is ValueKind.COMPOSITE


def _slot_names(cls: type) -> Iterator[str]:
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            yield name


def composite_fields(obj: Any) -> dict[str, Any]:
    """Own fields of an object: its ``__dict__`` plus any populated slots."""
    fields: dict[str, Any] = {}
    try:
        fields.update(vars(obj))
    except TypeError:
        pass
    for name in _slot_names(type(obj)):
        if name in fields:
            continue
        try:
            fields[name] = object.__getattribute__(obj, name)
        except AttributeError:
            continue
    return fields


def children(value: Any) -> Iterator[Any]:
    """Yield the values directly contained in ``value`` (keys included)."""
    kind = kind_of(value)
    if kind in LEAF_KINDS:
        return
    if kind in (ValueKind.MAPPING, ValueKind.ASSOCIATIVE_MAP):
        for key, item in value.items():
            yield key
            yield item
    elif kind in (ValueKind.SEQUENCE, ValueKind.UNIQUE_SET):
        yield from value
    else:
        yield from composite_fields(value).values()


def contains_cycle(value: Any) -> bool:
    """Check whether any container in ``value`` is reached twice.

    Walks the reachable graph with a call-local visited set keyed by identity
    and returns True the first time a container is revisited. A shared
    (diamond-shaped) sub-object therefore counts, like a true cycle.
    """
    visited: set[int] = set()
    pending = [value]
    while pending:
        current = pending.pop()
        if kind_of(current) in LEAF_KINDS:
            continue
        if isinstance(current, (tuple, frozenset)) and not current:
            # interned singletons
            continue
        marker = id(current)
        if marker in visited:
            return True
        visited.add(marker)
        pending.extend(children(current))
    return False
