"""Update and merge options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ArrayStrategy(StrEnum):
    """How ``merge`` combines a sequence in the source with the target's value."""

    REPLACE = "replace"
    """Source sequence (cloned) replaces whatever the target held. Default."""

    MERGE = "merge"
    """Cloned source items are appended after the target's existing items."""


@dataclass(frozen=True, slots=True)
class UpdateOptions:
    """Configuration for ``update_at`` and ``update_all_at``."""

    clone: bool = True
    """Clone the root before writing. False writes into the argument in place."""


@dataclass(frozen=True, slots=True)
class MergeOptions:
    """Configuration for ``merge``."""

    array_strategy: ArrayStrategy = ArrayStrategy.REPLACE

    def __post_init__(self) -> None:
        # Accept plain strings; ArrayStrategy(...) raises ValueError for unknown names
        object.__setattr__(self, "array_strategy", ArrayStrategy(self.array_strategy))
