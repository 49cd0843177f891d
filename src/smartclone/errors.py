"""Exception hierarchy.

Every error raised by smartclone derives from ``SmartCloneError`` and from the
builtin exception that best describes it, so callers can catch either.
"""

from __future__ import annotations


class SmartCloneError(Exception):
    """Base class for all smartclone errors."""


class UnknownStrategyError(SmartCloneError, ValueError):
    """Raised when a clone is forced with a strategy name that is not registered."""

    def __init__(self, name: object, known: tuple[str, ...] = ()) -> None:
        self.name = name
        self.known = known
        message = f"Unknown strategy: {name!r}"
        if known:
            message += f" (expected one of: {', '.join(known)})"
        super().__init__(message)


class NonSerializableError(SmartCloneError, TypeError):
    """Raised when a value cannot survive the serialization round trip."""


class UnavailableError(SmartCloneError, RuntimeError):
    """Raised when the host structural-clone primitive is missing."""


class InvalidTargetError(SmartCloneError, TypeError):
    """Raised when a mutation or merge is applied to a non-container root."""


class InvalidPathError(SmartCloneError, KeyError):
    """Raised when a path cannot be parsed or written."""

    def __str__(self) -> str:
        # KeyError repr-quotes its message
        return str(self.args[0]) if self.args else ""
