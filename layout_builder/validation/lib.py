"""Export document validation.

Checks an arbitrary value against the export document contract. The validator
does not assume the document came from the export transformer: any JSON
loaded from disk or received from elsewhere can be checked. Problems are
collected as human-readable strings rather than raised.
"""

import math
import re
from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from typing import Any

from layout_builder.schema import ALLOWED_EXPORT_TYPES

REQUIRED_ROOT_KEYS = ("project", "canvas", "elements", "metadata")

_TYPE_ALTERNATION = "|".join(re.escape(t) for t in ALLOWED_EXPORT_TYPES)
ID_PATTERN = re.compile(rf"elem_({_TYPE_ALTERNATION})_\d{{3}}", re.ASCII)
PERCENT_PATTERN = re.compile(r"\d+(\.\d+)?%", re.ASCII)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a document.

    Attributes:
        is_valid: True when no errors were found.
        errors: Error messages in the order they were found.
    """

    is_valid: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=list(errors))

    def to_dict(self) -> dict[str, Any]:
        return {"isValid": self.is_valid, "errors": list(self.errors)}


# =============================================================================
# Value Predicates
# =============================================================================


def _is_number(value: Any) -> bool:
    """JSON number check; booleans are not numbers."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_absent(value: Any) -> bool:
    """Missing-field check for required element fields.

    None, False, 0, NaN and the empty string all count as missing; objects
    and arrays, even empty ones, count as present.
    """
    if isinstance(value, (Mapping, list, tuple)):
        return False
    if isinstance(value, float) and math.isnan(value):
        return True
    return value is None or value is False or value == 0 or value == ""


def is_percent_string(value: Any) -> bool:
    """Whether value is a string like ``"100%"`` or ``" 12.5% "``."""
    return isinstance(value, str) and PERCENT_PATTERN.fullmatch(value.strip()) is not None


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# =============================================================================
# Element Checks
# =============================================================================


def _validate_element(
    index: int,
    element: Any,
    seen_ids: set[Hashable],
    z_values: list[int | float],
) -> list[str]:
    """Validate one element, collecting its numeric zIndex into ``z_values``."""
    if not isinstance(element, Mapping):
        return [f"Element[{index}] is not an object."]

    errors: list[str] = []
    element_id = element.get("id")
    element_type = element.get("type")
    position = element.get("position")

    if _is_absent(element_id):
        errors.append(f"Element[{index}] missing id.")
    if _is_absent(element_type):
        errors.append(f"Element[{index}] missing type.")
    if _is_absent(position):
        errors.append(f"Element[{index}] missing position.")

    if _is_absent(element_id) or _is_absent(position):
        return errors

    try:
        duplicate = element_id in seen_ids
    except TypeError:
        # Unhashable ids skip the uniqueness check.
        pass
    else:
        if duplicate:
            errors.append(f"Duplicate id: {element_id}")
        seen_ids.add(element_id)

    if not isinstance(element_id, str) or not ID_PATTERN.fullmatch(element_id):
        errors.append(f"ID {element_id} does not match pattern elem_[type]_NNN.")

    if element_type not in ALLOWED_EXPORT_TYPES:
        errors.append(f"Invalid type: {element_type}")

    if not isinstance(position, Mapping):
        position = {}

    x = position.get("x")
    y = position.get("y")
    if _is_number(x) and x < 0:
        errors.append(f"Element[{index}] x is negative.")
    if _is_number(y) and y < 0:
        errors.append(f"Element[{index}] y is negative.")

    width = position.get("width")
    height = position.get("height")
    if not (_is_number(width) or is_percent_string(width)):
        errors.append(f"Element[{index}] invalid width.")
    if not (_is_number(height) or height == "auto" or is_percent_string(height)):
        errors.append(f"Element[{index}] invalid height.")

    z_index = position.get("zIndex")
    if _is_number(z_index):
        z_values.append(z_index)
    else:
        errors.append(f"Element[{index}] missing numeric zIndex.")

    return errors


def _validate_z_sequence(z_values: list[int | float]) -> list[str]:
    """Distinct zIndex values must be exactly 1..K."""
    if not z_values:
        return []
    distinct = sorted(set(z_values))
    if distinct != list(range(1, len(distinct) + 1)):
        rendered = ", ".join(_format_number(v) for v in distinct)
        return [f"zIndex must be sequential 1..N. Got: [{rendered}]"]
    return []


# =============================================================================
# Main Interface
# =============================================================================


def validate_document(document: Any) -> ValidationResult:
    """Validate a candidate export document.

    All problems are collected, except for two structural failures that stop
    validation at once: a root that is not an object, and an ``elements``
    field that is not an array.

    Args:
        document: Any value, typically parsed JSON.

    Returns:
        ValidationResult; valid only when no errors were found.

    Example:
        >>> result = validate_document(json.loads(text))
        >>> if not result.is_valid:
        ...     for message in result.errors:
        ...         print(message)
    """
    if not isinstance(document, Mapping):
        return ValidationResult.from_errors(["Root JSON is not an object."])

    errors: list[str] = [
        f"Missing root key: {key}" for key in REQUIRED_ROOT_KEYS if key not in document
    ]

    elements = document.get("elements")
    if not isinstance(elements, (list, tuple)):
        errors.append("elements must be an array.")
        return ValidationResult.from_errors(errors)

    seen_ids: set[Hashable] = set()
    z_values: list[int | float] = []
    for index, element in enumerate(elements):
        errors.extend(_validate_element(index, element, seen_ids, z_values))

    errors.extend(_validate_z_sequence(z_values))
    return ValidationResult.from_errors(errors)


def is_valid_document(document: Any) -> bool:
    """Convenience check that returns True when the document has no errors."""
    return validate_document(document).is_valid


__all__ = [
    "REQUIRED_ROOT_KEYS",
    "ValidationResult",
    "is_percent_string",
    "validate_document",
    "is_valid_document",
]
