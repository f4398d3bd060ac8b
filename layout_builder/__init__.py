"""layout-builder: canvas page composer with JSON export and validation."""

from layout_builder.canvas import CanvasController, CanvasState
from layout_builder.export import ExportDocument, build_export_document
from layout_builder.geometry import Box, ContainerRect, Point, Size, overlaps, size_for
from layout_builder.model import CanvasElement
from layout_builder.placement import (
    PlacementResult,
    PlacementStatus,
    preview_drop,
    resolve_placement,
)
from layout_builder.schema import ElementType
from layout_builder.validation import ValidationResult, validate_document

__all__ = [
    # Schema / model
    "ElementType",
    "CanvasElement",
    # Geometry
    "Box",
    "ContainerRect",
    "Point",
    "Size",
    "size_for",
    "overlaps",
    # Placement
    "PlacementResult",
    "PlacementStatus",
    "resolve_placement",
    "preview_drop",
    # Controller
    "CanvasController",
    "CanvasState",
    # Export / validation
    "ExportDocument",
    "build_export_document",
    "ValidationResult",
    "validate_document",
]
