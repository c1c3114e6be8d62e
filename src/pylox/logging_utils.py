"""Runtime logging helpers."""

from __future__ import annotations

import os
import sys

from loguru import logger

_FORMAT = "{time:HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"
_DEFAULT_LEVEL = "WARNING"


def resolve_log_level(level: str | None = None) -> str:
    """Explicit level, else PYLOX_LOG_LEVEL, else WARNING."""
    if level is None:
        level = os.getenv("PYLOX_LOG_LEVEL", _DEFAULT_LEVEL)
    return level.strip().upper() or _DEFAULT_LEVEL


def configure_logging(level: str | None = None) -> str:
    """Route pylox diagnostics to stderr at the chosen level; returns that level."""
    resolved = resolve_log_level(level)
    logger.remove()
    logger.add(
        sys.stderr,
        level=resolved,
        format=_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    logger.enable("pylox")
    return resolved
