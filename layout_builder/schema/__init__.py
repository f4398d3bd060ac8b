"""Element schema: types, palette metadata and export type names.

Example usage:
    >>> from layout_builder.schema import ElementType, to_export_type
    >>> to_export_type(ElementType.TEXT)
    'text-content'
"""

from .lib import (
    ALLOWED_EXPORT_TYPES,
    ELEMENT_REGISTRY,
    GRID_SIZE,
    ElementMeta,
    ElementType,
    get_element_meta,
    parse_element_type,
    to_export_type,
)

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
