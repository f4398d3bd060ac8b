"""Authoritative element schema for the layout canvas.

This module is the single source of truth for the block types a layout can
contain. It provides:
- The closed ElementType vocabulary used on the canvas
- Palette metadata (labels, descriptions, size hints)
- The mapping from canvas types to exported document types
- Shared constants for the grid and the export id contract
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

GRID_SIZE = 20
"""Snapping unit in pixels for placement coordinates."""


class ElementType(str, Enum):
    """Block types available in the palette."""

    HEADER = "header"
    FOOTER = "footer"
    CARD = "card"
    TEXT = "text"
    SLIDER = "slider"


@dataclass(frozen=True)
class ElementMeta:
    """Palette metadata for an element type.

    Attributes:
        type: The canvas element type.
        label: Short display name.
        description: One-line description of the block.
        meta: Human-readable size and positioning hint.
        export_type: Type name used in exported documents.
    """

    type: ElementType
    label: str
    description: str
    meta: str
    export_type: str

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to a plain dictionary."""
        return {
            "type": self.type.value,
            "label": self.label,
            "description": self.description,
            "meta": self.meta,
            "export_type": self.export_type,
        }


ELEMENT_REGISTRY: dict[ElementType, ElementMeta] = {
    ElementType.HEADER: ElementMeta(
        type=ElementType.HEADER,
        label="Header",
        description="Page title area",
        meta="Width: 100%, Height: 80px, Position: sticky top",
        export_type="header",
    ),
    ElementType.FOOTER: ElementMeta(
        type=ElementType.FOOTER,
        label="Footer",
        description="Page footer area",
        meta="Width: 100%, Height: 60px, Position: bottom",
        export_type="footer",
    ),
    ElementType.CARD: ElementMeta(
        type=ElementType.CARD,
        label="Card",
        description="Content card",
        meta="Width: 300px, Height: 200px, Position: relative",
        export_type="card",
    ),
    ElementType.TEXT: ElementMeta(
        type=ElementType.TEXT,
        label="Text Content",
        description="Text block",
        meta="Width: auto, Height: auto, Position: relative",
        export_type="text-content",
    ),
    ElementType.SLIDER: ElementMeta(
        type=ElementType.SLIDER,
        label="Slider",
        description="Image slider",
        meta="Width: 100%, Height: 400px, Position: relative",
        export_type="slider",
    ),
}

ALLOWED_EXPORT_TYPES: tuple[str, ...] = tuple(
    meta.export_type for meta in ELEMENT_REGISTRY.values()
)
"""Type names accepted in exported documents, in palette order."""


def get_element_meta(element_type: ElementType) -> ElementMeta:
    """Get palette metadata for an element type.

    Raises:
        KeyError: If the type is not registered.
    """
    return ELEMENT_REGISTRY[element_type]


def to_export_type(element_type: ElementType) -> str:
    """Map a canvas element type to its exported type name."""
    return ELEMENT_REGISTRY[element_type].export_type


def parse_element_type(value: str) -> ElementType | None:
    """Resolve a type name to an ElementType.

    Accepts canvas names and exported names, case-insensitively.

    Returns:
        The matching ElementType, or None if not recognised.
    """
    normalized = value.lower().strip()
    for meta in ELEMENT_REGISTRY.values():
        if normalized in (meta.type.value, meta.export_type):
            return meta.type
    return None


__all__ = [
    "GRID_SIZE",
    "ElementType",
    "ElementMeta",
    "ELEMENT_REGISTRY",
    "ALLOWED_EXPORT_TYPES",
    "get_element_meta",
    "to_export_type",
    "parse_element_type",
]
