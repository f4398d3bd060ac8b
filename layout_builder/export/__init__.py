"""Export transformer: canvas elements to the JSON export document."""

from .lib import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    EXPORT_FILENAME,
    PROJECT_NAME,
    CanvasInfo,
    ExportDocument,
    ExportedElement,
    ExportedPosition,
    ExportMetadata,
    GridSettings,
    ProjectInfo,
    build_export_document,
    dump_export_json,
    export_id,
    format_timestamp,
    write_export_file,
)

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
