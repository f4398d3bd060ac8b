"""Core infrastructure shared by every layout-builder module."""

from .errors import (
    ElementNotFoundError,
    LayoutBuilderError,
    SessionConflictError,
    SessionStateError,
)
from .log import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "LayoutBuilderError",
    "ElementNotFoundError",
    "SessionConflictError",
    "SessionStateError",
]
