"""Collision-aware placement of dropped elements.

A drop point is snapped to the grid and the new element's default box is
pushed down one grid row at a time until it clears every existing element.
The push is bounded; when the bound is hit the box is accepted as-is and the
result is flagged so callers can react.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from layout_builder.geometry import (
    Box,
    ContainerRect,
    Point,
    overlaps,
    size_for,
    snap_to_grid,
    to_percent,
)
from layout_builder.model import CanvasElement
from layout_builder.schema import GRID_SIZE, ElementType
from layout_builder.zorder import next_front_z_index

logger = logging.getLogger(__name__)

MAX_PLACEMENT_SHIFTS = 50


class PlacementStatus(str, Enum):
    """Outcome of a placement."""

    PLACED = "placed"  # Box clears every existing element
    RESIDUAL_OVERLAP = "residual_overlap"  # Shift limit reached, still overlapping


@dataclass(frozen=True)
class PlacementResult:
    """A resolved placement, ready to become a CanvasElement.

    Attributes:
        element_type: Type of the element being placed.
        box: Final box in container pixels.
        percent_x: box.x as a percentage of the container width.
        percent_y: box.y as a percentage of the container height.
        z_index: Rank placing the element above all existing ones.
        status: Whether the box is collision-free.
        shifts: Number of grid rows the box was pushed down.
    """

    element_type: ElementType
    box: Box
    percent_x: float
    percent_y: float
    z_index: int
    status: PlacementStatus
    shifts: int = 0

    @property
    def placed_cleanly(self) -> bool:
        return self.status == PlacementStatus.PLACED

    def to_element(self, element_id: int) -> CanvasElement:
        """Build the canvas element for this placement."""
        return CanvasElement(
            id=element_id,
            type=self.element_type,
            x=self.box.x,
            y=self.box.y,
            width=self.box.width,
            height=self.box.height,
            percent_x=self.percent_x,
            percent_y=self.percent_y,
            z_index=self.z_index,
        )


@dataclass(frozen=True)
class DropPreview:
    """Live feedback while a palette item hovers over the canvas.

    Attributes:
        is_over: The pointer is inside the container.
        valid: Dropping here would not overlap an existing element.
        box: Candidate box at the snapped position (None when outside).
    """

    is_over: bool
    valid: bool
    box: Box | None = None


def _candidate_box(
    element_type: ElementType, point: Point, container: ContainerRect
) -> Box:
    size = size_for(element_type, container.width)
    return Box(snap_to_grid(point.x), snap_to_grid(point.y), size.width, size.height)


def _collides(box: Box, existing: Sequence[CanvasElement]) -> bool:
    return any(overlaps(box, element.box) for element in existing)


def resolve_placement(
    element_type: ElementType,
    point: Point,
    container: ContainerRect,
    existing: Sequence[CanvasElement],
) -> PlacementResult:
    """Turn a drop point into a placed box.

    Args:
        element_type: Type of the dropped element.
        point: Drop point in container-local coordinates.
        container: The container's current rendered rect.
        existing: Elements already on the canvas.

    Returns:
        PlacementResult. ``status`` is RESIDUAL_OVERLAP when the box still
        overlaps after MAX_PLACEMENT_SHIFTS pushes.

    Example:
        >>> result = resolve_placement(
        ...     ElementType.CARD, Point(47, 93), ContainerRect.of_size(1200, 800), []
        ... )
        >>> result.box
        Box(x=40, y=100, width=300, height=200)
    """
    element_type = ElementType(element_type)
    box = _candidate_box(element_type, point, container)

    shifts = 0
    while _collides(box, existing) and shifts < MAX_PLACEMENT_SHIFTS:
        box = box.shifted(dy=GRID_SIZE)
        shifts += 1

    if _collides(box, existing):
        status = PlacementStatus.RESIDUAL_OVERLAP
        logger.warning(
            f"Placed {element_type.value} at ({box.x}, {box.y}) with overlap "
            f"after {shifts} shifts"
        )
    else:
        status = PlacementStatus.PLACED
        logger.debug(
            f"Placed {element_type.value} at ({box.x}, {box.y}) after {shifts} shifts"
        )

    return PlacementResult(
        element_type=element_type,
        box=box,
        percent_x=to_percent(box.x, container.width),
        percent_y=to_percent(box.y, container.height),
        z_index=next_front_z_index(existing),
        status=status,
        shifts=shifts,
    )


def preview_drop(
    element_type: ElementType,
    point: Point,
    container: ContainerRect,
    existing: Sequence[CanvasElement],
) -> DropPreview:
    """Check whether dropping at ``point`` would be collision-free.

    Performs the same snap as resolve_placement and a single overlap pass,
    without shifting.
    """
    if not container.contains_local(point):
        return DropPreview(is_over=False, valid=False)

    box = _candidate_box(element_type, point, container)
    return DropPreview(is_over=True, valid=not _collides(box, existing), box=box)


__all__ = [
    "MAX_PLACEMENT_SHIFTS",
    "PlacementStatus",
    "PlacementResult",
    "DropPreview",
    "resolve_placement",
    "preview_drop",
]
