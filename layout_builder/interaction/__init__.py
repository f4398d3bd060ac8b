"""Interactive transform sessions for moving and resizing elements."""

from .lib import (
    MIN_RESIZE_WIDTH,
    RESIZE_EDGE_MARGIN,
    MoveSession,
    MoveUpdate,
    ResizeSession,
    ResizeUpdate,
    SessionState,
    TransformSession,
    compute_move,
    compute_resize,
)

__all__ = [
    "MIN_RESIZE_WIDTH",
    "RESIZE_EDGE_MARGIN",
    "SessionState",
    "MoveSession",
    "ResizeSession",
    "MoveUpdate",
    "ResizeUpdate",
    "compute_move",
    "compute_resize",
    "TransformSession",
]
