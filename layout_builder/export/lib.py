"""Canvas to export-document transform.

The export document is the interchange format for layouts: it is what gets
copied or downloaded, and what the validator checks. Field names are camelCase
in JSON and are produced through pydantic aliases.

Every call builds a fresh document; input elements are never referenced by
the output.
"""

import json
import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

from layout_builder.geometry import round_half_up
from layout_builder.model import CanvasElement
from layout_builder.schema import GRID_SIZE, ElementType, to_export_type
from layout_builder.zorder import rank_by_z_index

logger = logging.getLogger(__name__)

PROJECT_NAME = "Test Builder Layout"
PROJECT_VERSION = "1.0"
CANVAS_WIDTH = 1200
CANVAS_HEIGHT = 800
EXPORT_FORMAT = "json"
EXPORT_VERSION = "2.0"
EXPORT_FILENAME = "test-builder-layout.json"


# =============================================================================
# Document Models
# =============================================================================


class _ExportModel(BaseModel):
    """Base for export models: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectInfo(_ExportModel):
    name: str
    version: str = PROJECT_VERSION
    created: str
    last_modified: str


class GridSettings(_ExportModel):
    enabled: bool = True
    size: int = GRID_SIZE
    snap: bool = True


class CanvasInfo(_ExportModel):
    """Logical canvas block. Always 1200x800 regardless of render size."""

    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    grid: GridSettings = Field(default_factory=GridSettings)


class ExportedPosition(_ExportModel):
    x: int
    y: int
    width: int | str
    height: int
    z_index: int
    fixed: bool | None = None

    @model_serializer(mode="wrap")
    def _omit_unfixed(self, handler):
        data = handler(self)
        if self.fixed is None:
            data.pop("fixed", None)
        return data


class ExportedElement(_ExportModel):
    """One element of the export document.

    Attributes:
        id: ``elem_<type>_<NNN>`` where NNN is the export index.
        type: Exported type name.
        content: Placeholder content for the block.
        position: Rounded geometry and dense z-index.
        responsive: Breakpoint overrides; only header and card have them,
            and the key is left out entirely for other types.
    """

    id: str
    type: str
    content: dict[str, Any]
    position: ExportedPosition
    responsive: dict[str, Any] | None = None

    @model_serializer(mode="wrap")
    def _omit_responsive(self, handler):
        data = handler(self)
        if self.responsive is None:
            data.pop("responsive", None)
        return data


class ExportMetadata(_ExportModel):
    total_elements: int
    export_format: str = EXPORT_FORMAT
    export_version: str = EXPORT_VERSION


class ExportDocument(_ExportModel):
    """Complete export document."""

    project: ProjectInfo
    canvas: CanvasInfo = Field(default_factory=CanvasInfo)
    elements: list[ExportedElement] = Field(default_factory=list)
    metadata: ExportMetadata

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dictionary with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# Per-type Synthesis
# =============================================================================


def _content_for(element_type: ElementType, index: int, year: int) -> dict[str, Any]:
    match element_type:
        case ElementType.HEADER:
            return {"text": "Site Title", "style": "default"}
        case ElementType.CARD:
            return {
                "title": f"Card {index}",
                "description": "Content description",
                "image": None,
            }
        case ElementType.TEXT:
            return {
                "html": "Text content goes here",
                "plainText": "Text content goes here",
            }
        case ElementType.FOOTER:
            return {"copyright": f"© {year} Test Builder", "links": []}
        case ElementType.SLIDER:
            return {}


def _responsive_for(element_type: ElementType) -> dict[str, Any] | None:
    match element_type:
        case ElementType.HEADER:
            return {
                "mobile": {"width": "100%", "height": 60},
                "tablet": {"width": "100%", "height": 70},
            }
        case ElementType.CARD:
            return {
                "mobile": {"x": 10, "width": "calc(100% - 20px)"},
                "tablet": {"x": 30, "width": 350},
            }
        case ElementType.FOOTER | ElementType.TEXT | ElementType.SLIDER:
            return None


def _position_for(element: CanvasElement, index: int) -> ExportedPosition:
    y = round_half_up(element.y)
    height = round_half_up(element.height)

    match element.type:
        case ElementType.HEADER:
            return ExportedPosition(x=0, y=y, width="100%", height=height, z_index=index)
        case ElementType.FOOTER:
            return ExportedPosition(
                x=0, y=y, width="100%", height=height, z_index=index, fixed=True
            )
        case ElementType.CARD | ElementType.TEXT | ElementType.SLIDER:
            return ExportedPosition(
                x=round_half_up(element.x),
                y=y,
                width=round_half_up(element.width),
                height=height,
                z_index=index,
            )


def export_id(export_type: str, index: int) -> str:
    """Element id for an export type and 1-based export index."""
    return f"elem_{export_type}_{index:03d}"


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return (
        moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )


# =============================================================================
# Main Interface
# =============================================================================


def build_export_document(
    elements: Iterable[CanvasElement],
    now: datetime | None = None,
    project_name: str = PROJECT_NAME,
) -> ExportDocument:
    """Build the export document for a canvas.

    Elements are ranked by z-index (absent and 0 rank as 1; ties keep
    collection order) and numbered 1..N. That number, not the raw z-index,
    becomes both the exported zIndex and the id suffix.

    Args:
        elements: Canvas elements in collection order.
        now: Invocation time; defaults to the current UTC time.
        project_name: Name written into the project block.

    Returns:
        A new ExportDocument.

    Example:
        >>> doc = build_export_document(controller.state.elements)
        >>> doc.to_dict()["elements"][0]["id"]
        'elem_header_001'
    """
    now = now or datetime.now(UTC)
    timestamp = format_timestamp(now)

    exported: list[ExportedElement] = []
    for index, element in enumerate(rank_by_z_index(elements), start=1):
        export_type = to_export_type(element.type)
        exported.append(
            ExportedElement(
                id=export_id(export_type, index),
                type=export_type,
                content=_content_for(element.type, index, now.year),
                position=_position_for(element, index),
                responsive=_responsive_for(element.type),
            )
        )

    logger.debug(f"Built export document with {len(exported)} elements")

    return ExportDocument(
        project=ProjectInfo(
            name=project_name,
            created=timestamp,
            last_modified=timestamp,
        ),
        canvas=CanvasInfo(),
        elements=exported,
        metadata=ExportMetadata(total_elements=len(exported)),
    )


def dump_export_json(document: ExportDocument) -> str:
    """Render a document as two-space indented JSON."""
    return json.dumps(document.to_dict(), indent=2, ensure_ascii=False)


def write_export_file(document: ExportDocument, path: Path | str) -> Path:
    """Write a document to disk as JSON.

    Raises:
        OSError: If the file cannot be written. Callers own the recovery;
            nothing on the canvas depends on this succeeding.
    """
    path = Path(path)
    path.write_text(dump_export_json(document) + "\n", encoding="utf-8")
    logger.info(f"Wrote {document.metadata.total_elements} elements to {path}")
    return path


__all__ = [
    "PROJECT_NAME",
    "CANVAS_WIDTH",
    "CANVAS_HEIGHT",
    "EXPORT_FILENAME",
    "ProjectInfo",
    "GridSettings",
    "CanvasInfo",
    "ExportedPosition",
    "ExportedElement",
    "ExportMetadata",
    "ExportDocument",
    "export_id",
    "format_timestamp",
    "build_export_document",
    "dump_export_json",
    "write_export_file",
]
