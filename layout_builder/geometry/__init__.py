"""Geometry engine: size presets, overlap tests and grid snapping."""

from .lib import (
    DEFAULT_SIZE,
    Box,
    ContainerRect,
    Point,
    Size,
    clamp,
    overlaps,
    round_half_up,
    size_for,
    snap_to_grid,
    to_percent,
)

__all__ = [
    "DEFAULT_SIZE",
    "Point",
    "Size",
    "Box",
    "ContainerRect",
    "size_for",
    "overlaps",
    "round_half_up",
    "snap_to_grid",
    "clamp",
    "to_percent",
]
