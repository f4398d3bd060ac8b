"""Placement resolver: grid snapping and collision avoidance for drops."""

from .lib import (
    MAX_PLACEMENT_SHIFTS,
    DropPreview,
    PlacementResult,
    PlacementStatus,
    preview_drop,
    resolve_placement,
)

__all__ = [
    "MAX_PLACEMENT_SHIFTS",
    "PlacementStatus",
    "PlacementResult",
    "DropPreview",
    "resolve_placement",
    "preview_drop",
]
