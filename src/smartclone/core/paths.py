"""Path addressing over nested containers.

A path is either a dotted string (``"database.connection.port"``) or an
already-split sequence of segments (``["database", "connection", "port"]``).
Segments address dict keys, list indices (``"items.0"``) and attributes of
plain objects.

``set_path`` is the only function in smartclone that mutates its argument.
The immutable API in ``smartclone.updates`` clones before calling it.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any, TypeVar

from smartclone.core.types import MISSING, ValueKind, composite_fields, kind_of
from smartclone.errors import InvalidPathError

C = TypeVar("C")

Segment = str | int
PathLike = str | Sequence[Segment]


def parse_path(path: PathLike) -> list[Segment]:
    """Split a path into its ordered segments.

    Strings are split on ``.`` and empty segments are dropped, so leading,
    trailing and doubled separators are tolerated. Pre-split sequences are
    returned as a list with their segments untouched.

    Raises:
        InvalidPathError: If ``path`` is neither a string nor a sequence.
    """
    if isinstance(path, str):
        return [segment for segment in path.split(".") if segment]
    if isinstance(path, (list, tuple)):
        return list(path)
    raise InvalidPathError(f"Path must be a string or a sequence of segments, got {type(path).__name__}")


def _as_index(segment: Segment) -> int | None:
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        return segment
    if isinstance(segment, str) and segment.isdigit():
        return int(segment)
    return None


def get_key(container: Any, segment: Segment) -> Any:
    """Value stored under ``segment``, or ``MISSING`` if there is no such key."""
    if isinstance(container, Mapping):
        return container[segment] if segment in container else MISSING
    if isinstance(container, list):
        index = _as_index(segment)
        if index is None or not 0 <= index < len(container):
            return MISSING
        return container[index]
    if container is not None and kind_of(container) is ValueKind.COMPOSITE:
        return composite_fields(container).get(str(segment), MISSING)
    return MISSING


def _has_key(container: Any, segment: Segment) -> bool:
    if isinstance(container, Mapping):
        return segment in container
    if isinstance(container, list):
        index = _as_index(segment)
        return index is not None and 0 <= index < len(container)
    if container is not None and kind_of(container) is ValueKind.COMPOSITE:
        return str(segment) in composite_fields(container)
    return False


def set_key(container: Any, segment: Segment, value: Any) -> None:
    """Store ``value`` under a single segment. Appending at ``len(list)`` is allowed."""
    if isinstance(container, MutableMapping):
        container[segment] = value
    elif isinstance(container, list):
        index = _as_index(segment)
        if index is None:
            raise InvalidPathError(f"List segment must be an integer index, got {segment!r}")
        if index == len(container):
            container.append(value)
        elif 0 <= index < len(container):
            container[index] = value
        else:
            raise InvalidPathError(f"Index {index} out of range for list of length {len(container)}")
    else:
        try:
            setattr(container, str(segment), value)
        except AttributeError:
            # Frozen dataclasses and similar reject plain setattr
            object.__setattr__(container, str(segment), value)


def _is_writable_container(value: Any) -> bool:
    return isinstance(value, (MutableMapping, list)) or (
        value is not None and kind_of(value) is ValueKind.COMPOSITE
    )


def has_path(container: Any, path: PathLike) -> bool:
    """Check whether every segment of ``path`` resolves to a present key.

    Existence is about key presence: a key holding ``None`` (or ``MISSING``)
    still exists.
    """
    current = container
    for segment in parse_path(path):
        if current is None or not _has_key(current, segment):
            return False
        current = get_key(current, segment)
    return True


def get_path(container: Any, path: PathLike, default: Any = None) -> Any:
    """Read the value at ``path``.

    Returns ``default`` when the walk cannot complete or the resolved value is
    ``MISSING``. A stored ``None`` is returned as-is.
    """
    current = container
    for segment in parse_path(path):
        if current is None:
            return default
        current = get_key(current, segment)
        if current is MISSING:
            return default
    return default if current is MISSING else current


def set_path(container: C, path: PathLike, value: Any) -> C:
    """Write ``value`` at ``path`` in place and return ``container``.

    Intermediate segments that are absent, or hold something that is not a
    writable container, are replaced by an empty dict before descending.

    Raises:
        InvalidPathError: For an empty path or a list index past the end.
    """
    segments = parse_path(path)
    if not segments:
        raise InvalidPathError("Cannot write at an empty path")

    current: Any = container
    for segment in segments[:-1]:
        child = get_key(current, segment)
        if not _is_writable_container(child):
            child = {}
            set_key(current, segment, child)
        current = child

    set_key(current, segments[-1], value)
    return container
