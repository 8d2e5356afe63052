"""Process-level logging setup."""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"

_CONFIGURED_LEVEL: str | None = None


def configure_logging(level: str | None = None) -> None:
    """Send loguru output to stderr at the given level. Safe to call twice."""
    global _CONFIGURED_LEVEL
    if level is None:
        from src.settings import get_settings

        level = get_settings().LOG_LEVEL
    level = level.upper()
    if level == _CONFIGURED_LEVEL:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    _CONFIGURED_LEVEL = level
