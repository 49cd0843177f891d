"""Core functionalities: stateless value classification and path addressing.

Architecture Note:
    core/ contains pure functions with no state between calls.
    ``set_path`` is the single in-place mutator; everything built on top of it
    in ``smartclone.updates`` clones first.
"""

from smartclone.core.paths import (
    PathLike,
    Segment,
    get_key,
    get_path,
    has_path,
    parse_path,
    set_key,
    set_path,
)
from smartclone.core.types import (
    MISSING,
    ValueKind,
    children,
    composite_fields,
    contains_cycle,
    is_associative_map,
    is_atomic,
    is_callable_value,
    is_keyed_container,
    is_mapping,
    is_pattern,
    is_sequence,
    is_temporal,
    is_unique_set,
    kind_of,
)

__all__ = [
    # Types
    "MISSING",
    "ValueKind",
    "kind_of",
    "children",
    "composite_fields",
    # Predicates
    "is_atomic",
    "is_callable_value",
    "is_sequence",
    "is_mapping",
    "is_associative_map",
    "is_unique_set",
    "is_temporal",
    "is_pattern",
    "is_keyed_container",
    "contains_cycle",
    # Paths
    "PathLike",
    "Segment",
    "parse_path",
    "has_path",
    "get_path",
    "set_path",
    "get_key",
    "set_key",
]
