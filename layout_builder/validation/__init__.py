"""Export document validation."""

from layout_builder.validation.lib import (
    REQUIRED_ROOT_KEYS,
    ValidationResult,
    is_percent_string,
    is_valid_document,
    validate_document,
)

__all__ = [
    "REQUIRED_ROOT_KEYS",
    "ValidationResult",
    "validate_document",
    "is_valid_document",
    "is_percent_string",
]
