"""Core logging implementation for layout-builder."""

import logging
import sys
from typing import Optional, TextIO

__all__ = ["get_logger", "parse_level", "setup_logging"]

DEFAULT_LOGGER_NAME = "layout-builder"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_level(name: Optional[str], default: int = logging.INFO) -> int:
    """Translate a level name such as "debug" into a logging constant.

    Unknown or empty names fall back to ``default``.
    """
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    level: int | str = logging.INFO, stream: Optional[TextIO] = None
) -> None:
    """Configure root logging once per process.

    Args:
        level: Logging constant or level name (e.g. "debug", as read from
            LAYOUT_LOG_LEVEL). Unknown names mean INFO.
        stream: Output stream; the current ``sys.stderr`` when omitted.
    """
    if isinstance(level, str):
        level = parse_level(level)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=stream if stream is not None else sys.stderr,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for ``name``, or the package logger when name is empty."""
    return logging.getLogger(name or DEFAULT_LOGGER_NAME)
