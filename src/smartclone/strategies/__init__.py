"""Interchangeable clone algorithms."""

from smartclone.strategies.protocol import CloneStrategy
from smartclone.strategies.recursive import RecursiveStrategy
from smartclone.strategies.serialization import SerializationStrategy, to_json_compatible
from smartclone.strategies.structural import StructuralStrategy, find_structural_primitive

__all__ = [
    # Protocol
    "CloneStrategy",
    # Implementations
    "StructuralStrategy",
    "SerializationStrategy",
    "RecursiveStrategy",
    # Helpers
    "find_structural_primitive",
    "to_json_compatible",
]
