"""Immutable path updates and deep merge.

Stateless functions built on ``smartclone.core.paths.set_path``. Unless told
otherwise they clone their input once and write into that clone, so the
caller's data is never touched.
"""

from __future__ import annotations

import dataclasses
import math
from collections import deque
from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any, TypeVar

from loguru import logger

from smartclone.cloning import clone
from smartclone.config import get_settings
from smartclone.core.paths import PathLike, get_key, set_key, set_path
from smartclone.core.types import ValueKind, composite_fields, is_keyed_container, kind_of
from smartclone.errors import InvalidTargetError
from smartclone.updates.models import ArrayStrategy, MergeOptions, UpdateOptions

T = TypeVar("T")

_RECORD_KINDS = frozenset({ValueKind.MAPPING, ValueKind.ASSOCIATIVE_MAP, ValueKind.COMPOSITE})
_ATOMIC_FOR_MERGE = frozenset({ValueKind.TEMPORAL, ValueKind.PATTERN, ValueKind.UNIQUE_SET})


def _full_clone(value: T) -> T:
    # Updates always copy the whole graph, whatever cutoff is configured
    return clone(value, max_depth=math.inf)


def _resolve_update_options(options: UpdateOptions | None, overrides: dict[str, Any]) -> UpdateOptions:
    base = options if options is not None else UpdateOptions(clone=get_settings().clone_on_update)
    return dataclasses.replace(base, **overrides) if overrides else base


def _resolve_merge_options(options: MergeOptions | None, overrides: dict[str, Any]) -> MergeOptions:
    base = options if options is not None else MergeOptions(array_strategy=get_settings().array_strategy)
    return dataclasses.replace(base, **overrides) if overrides else base


def _require_keyed(obj: Any) -> None:
    if not is_keyed_container(obj):
        raise InvalidTargetError(
            f"Cannot update {type(obj).__name__}: expected a mapping, list or object with fields"
        )


def _is_record(value: Any) -> bool:
    return kind_of(value) in _RECORD_KINDS


def _own_items(record: Any) -> Iterable[tuple[Any, Any]]:
    if isinstance(record, Mapping):
        return list(record.items())
    return composite_fields(record).items()


def update_at(obj: T, path: PathLike, value: Any, options: UpdateOptions | None = None, **overrides: Any) -> T:
    """Return ``obj`` with ``value`` written at ``path``.

    Args:
        obj: Mapping, list or object to update.
        path: Dotted string or segment sequence. Missing levels are created.
        value: Value to store (not cloned).
        options: ``UpdateOptions``. ``clone=False`` writes into ``obj``.
        **overrides: Individual ``UpdateOptions`` fields.

    Returns:
        The updated clone, or ``obj`` itself when ``clone=False``.

    Raises:
        InvalidTargetError: If ``obj`` is not a keyed container.
    """
    opts = _resolve_update_options(options, overrides)
    _require_keyed(obj)
    result = _full_clone(obj) if opts.clone else obj
    return set_path(result, path, value)


def update_all_at(
    obj: T,
    updates: Mapping[Any, Any],
    options: UpdateOptions | None = None,
    **overrides: Any,
) -> T:
    """Apply several path writes to a single clone of ``obj``.

    Writes happen in ``updates`` iteration order, so the last one wins when
    paths overlap. ``{"a": 1, "a.b": 2}`` on ``{}`` gives ``{"a": {"b": 2}}``:
    the second write finds the non-container ``1`` at ``a`` and replaces it.

    Raises:
        InvalidTargetError: If ``obj`` is not a keyed container.
    """
    opts = _resolve_update_options(options, overrides)
    _require_keyed(obj)
    result = _full_clone(obj) if opts.clone else obj
    for path, value in updates.items():
        set_path(result, path, value)
    logger.debug("applied {} path updates", len(updates))
    return result


def merge(target: T, source: Any, options: MergeOptions | None = None, **overrides: Any) -> T:
    """Deep-merge ``source`` into a clone of ``target``.

    For each own key of ``source``:

    - sequences replace the target's value with a clone (``replace``), or are
      appended as clones after the target's existing sequence (``merge``)
    - dates, patterns and sets are assigned as fresh clones, never merged
    - mappings and objects are merged recursively; a non-container in the
      target at that key is first replaced by an empty dict
    - anything else is assigned as-is

    Keys present only in ``target`` are kept. Neither argument is modified.

    Args:
        target: Base mapping or object.
        source: Mapping or object whose keys take precedence.
        options: ``MergeOptions``.
        **overrides: Individual ``MergeOptions`` fields, e.g.
            ``array_strategy="merge"``.

    Raises:
        InvalidTargetError: If ``target`` or ``source`` is not a mapping or object.
        ValueError: For an unknown array strategy.
    """
    opts = _resolve_merge_options(options, overrides)
    for role, value in (("target", target), ("source", source)):
        if not _is_record(value):
            raise InvalidTargetError(f"Cannot merge {role} of type {type(value).__name__}")

    result = _full_clone(target)
    _fold(result, source, opts.array_strategy, {})
    return result


def _concat(existing: Any, extra: Any) -> Any:
    """Append ``extra`` after ``existing``, keeping the container type where it can grow."""
    items = [*existing, *extra]
    if isinstance(existing, deque):
        return type(existing)(items, maxlen=existing.maxlen)
    if isinstance(existing, tuple) and hasattr(type(existing), "_fields"):
        # A named tuple has fixed arity; past it the result is a plain tuple
        if len(items) == len(existing._fields):
            return type(existing)._make(items)
        return tuple(items)
    return type(existing)(items)


def _fold(dest: Any, src: Any, array_strategy: ArrayStrategy, active: dict[int, Any]) -> None:
    """Merge ``src``'s own keys into ``dest`` in place.

    ``active`` maps each source record on the current descent path to the
    destination node it is being folded into; a source cycle is reproduced as
    a reference to that node.
    """
    active[id(src)] = dest
    try:
        for key, value in _own_items(src):
            kind = kind_of(value)
            if kind is ValueKind.SEQUENCE:
                cloned = _full_clone(value)
                existing = get_key(dest, key)
                if array_strategy is ArrayStrategy.MERGE and kind_of(existing) is ValueKind.SEQUENCE:
                    cloned = _concat(existing, cloned)
                set_key(dest, key, cloned)
            elif kind in _ATOMIC_FOR_MERGE:
                set_key(dest, key, _full_clone(value))
            elif kind in _RECORD_KINDS:
                if id(value) in active:
                    set_key(dest, key, active[id(value)])
                    continue
                existing = get_key(dest, key)
                if not (isinstance(existing, MutableMapping) or kind_of(existing) is ValueKind.COMPOSITE):
                    existing = {}
                    set_key(dest, key, existing)
                _fold(existing, value, array_strategy, active)
            else:
                set_key(dest, key, value)
    finally:
        del active[id(src)]


update_nested = update_at
update_multiple = update_all_at
deep_merge = merge
