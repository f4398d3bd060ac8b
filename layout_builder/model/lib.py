"""Canvas element model.

CanvasElement is the unit of state on the canvas. Elements are owned by the
canvas state's element list and are identified by their integer id only.
"""

from pydantic import BaseModel, Field

from layout_builder.geometry import Box, Point, Size
from layout_builder.schema import ElementType


class CanvasElement(BaseModel):
    """A block placed on the canvas.

    Attributes:
        id: Integer id assigned at creation; unique and never reused.
        type: Block type from the palette.
        x: Left edge in container pixels.
        y: Top edge in container pixels.
        width: Width in pixels.
        height: Height in pixels.
        percent_x: x as a percentage of the container width when last set.
        percent_y: y as a percentage of the container height when last set.
        z_index: Stacking rank. Only a sort key: gaps, duplicates, negative
            values and None are all legal.
    """

    id: int = Field(..., description="Unique element id")
    type: ElementType = Field(..., description="Block type")

    x: float = Field(0, description="Left edge in pixels")
    y: float = Field(0, description="Top edge in pixels")
    width: float = Field(..., description="Width in pixels")
    height: float = Field(..., description="Height in pixels")

    percent_x: float = Field(0.0, description="x as % of container width")
    percent_y: float = Field(0.0, description="y as % of container height")

    z_index: int | None = Field(None, description="Advisory stacking rank")

    model_config = {
        "validate_assignment": True,
    }

    @property
    def box(self) -> Box:
        """The element's bounding box."""
        return Box(self.x, self.y, self.width, self.height)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)


def find_element(elements: list[CanvasElement], element_id: int) -> CanvasElement | None:
    """Return the element with the given id, or None."""
    for element in elements:
        if element.id == element_id:
            return element
    return None


__all__ = ["CanvasElement", "find_element"]
