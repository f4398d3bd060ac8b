"""Geometry primitives for the layout canvas.

Coordinates are pixels in the container's local frame: the origin is the
container's top-left corner, x grows right and y grows down.
"""

import math
from dataclasses import dataclass, replace

from layout_builder.schema import GRID_SIZE, ElementType

DEFAULT_SIZE = (200, 100)
"""Fallback size for types outside the palette."""


@dataclass(frozen=True)
class Point:
    """A pointer position."""

    x: float
    y: float


@dataclass(frozen=True)
class Size:
    """Width and height in pixels."""

    width: float
    height: float


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle anchored at its top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def shifted(self, dx: float = 0, dy: float = 0) -> "Box":
        """Return a copy moved by (dx, dy)."""
        return replace(self, x=self.x + dx, y=self.y + dy)


@dataclass(frozen=True)
class ContainerRect:
    """The container's rendered rectangle.

    Attributes:
        left: Viewport x of the container's left edge.
        top: Viewport y of the container's top edge.
        width: Rendered width in pixels.
        height: Rendered height in pixels.
    """

    left: float
    top: float
    width: float
    height: float

    @classmethod
    def of_size(cls, width: float, height: float) -> "ContainerRect":
        """Container positioned at the viewport origin."""
        return cls(left=0, top=0, width=width, height=height)

    def to_local(self, point: Point) -> Point:
        """Convert a viewport point to container-local coordinates."""
        return Point(point.x - self.left, point.y - self.top)

    def contains_local(self, point: Point) -> bool:
        """Whether a local point lies inside the container (edges included)."""
        return 0 <= point.x <= self.width and 0 <= point.y <= self.height


def size_for(element_type: ElementType | str, container_width: float) -> Size:
    """Default size of a freshly placed element.

    Header, footer and slider stretch to the container width; card has a
    fixed size; text is capped at 400px or 60% of the container.

    Args:
        element_type: Element type (enum or its string value).
        container_width: Rendered container width in pixels.

    Returns:
        Size for the new element. Unknown types get 200x100.
    """
    try:
        element_type = ElementType(element_type)
    except ValueError:
        return Size(*DEFAULT_SIZE)

    match element_type:
        case ElementType.HEADER:
            return Size(container_width, 80)
        case ElementType.FOOTER:
            return Size(container_width, 60)
        case ElementType.CARD:
            return Size(300, 200)
        case ElementType.TEXT:
            return Size(min(400, container_width * 0.6), 100)
        case ElementType.SLIDER:
            return Size(container_width, 400)


def overlaps(a: Box, b: Box) -> bool:
    """Check whether two boxes overlap.

    Boxes that only share an edge do not overlap, which lets new elements
    sit flush against existing ones.
    """
    return not (
        a.right <= b.x or a.x >= b.right or a.bottom <= b.y or a.y >= b.bottom
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going towards +infinity."""
    return math.floor(value + 0.5)


def snap_to_grid(value: float, grid: int = GRID_SIZE) -> int:
    """Round a coordinate to the nearest multiple of the grid size."""
    return round_half_up(value / grid) * grid


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]; low wins when the range is empty."""
    return max(low, min(value, high))


def to_percent(value: float, dimension: float) -> float:
    """Express a coordinate as a percentage of a container dimension.

    A zero-sized dimension yields 0 rather than dividing by zero.
    """
    if dimension == 0:
        return 0.0
    return value / dimension * 100


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
