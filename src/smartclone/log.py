"""Logging setup.

smartclone logs through loguru and is silent by default: the package calls
``logger.disable("smartclone")`` on import. Applications opt in with
``enable_logging()``.
"""

from __future__ import annotations

import sys
from typing import Any

from loguru import logger

from smartclone.config import get_settings

_PACKAGE = "smartclone"
_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)

# Handler added by enable_logging, if any
_handler_id: int | None = None


def enable_logging(level: str | None = None, sink: Any = None) -> int:
    """Turn on smartclone log records and route them to ``sink``.

    Calling it again replaces the previous handler instead of adding a second.

    Args:
        level: Minimum level. Defaults to ``SMARTCLONE_LOG_LEVEL`` (WARNING).
        sink: Any loguru sink. Defaults to stderr.

    Returns:
        The loguru handler id.
    """
    global _handler_id

    if _handler_id is not None:
        logger.remove(_handler_id)
    logger.enable(_PACKAGE)
    _handler_id = logger.add(
        sink if sink is not None else sys.stderr,
        level=level or get_settings().log_level,
        format=_FORMAT,
        filter=_PACKAGE,
        colorize=sink is None,
    )
    return _handler_id


def disable_logging() -> None:
    """Silence smartclone again and drop the handler added by ``enable_logging``."""
    global _handler_id

    logger.disable(_PACKAGE)
    if _handler_id is not None:
        logger.remove(_handler_id)
        _handler_id = None
