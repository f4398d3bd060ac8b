"""Environment configuration for layout-builder.

Every setting the package reads from the environment is declared once as an
EnvVar member carrying its name, default, type and a short description.
Values are looked up through get_environment(), which prefers an explicit
override, then the process environment, then the declared default.

Example:
    >>> from layout_builder.config import EnvVar, get_environment
    >>>
    >>> get_environment(EnvVar.LAYOUT_CONTAINER_WIDTH)
    1200
    >>> get_environment(EnvVar.LAYOUT_CONTAINER_WIDTH, override=960)
    960
"""

import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

# =============================================================================
# Variable Declarations
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Declaration of one environment variable.

    Attributes:
        name: Variable name as it appears in the environment.
        default: Value used when the variable is unset or unparsable.
        var_type: Target type for the raw string (str, int or Path).
        description: One-line help text shown by ``python . env``.
        category: Group name used for filtering.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """Environment variables read by layout-builder.

    Categories:
        - logging: Log level
        - export: Project name and export file path
        - canvas: Rendered container defaults used by the CLI
    """

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    LAYOUT_LOG_LEVEL = EnvConfig(
        name="LAYOUT_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level name (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------
    LAYOUT_PROJECT_NAME = EnvConfig(
        name="LAYOUT_PROJECT_NAME",
        default="Test Builder Layout",
        var_type=str,
        description="Project name written into exported documents",
        category="export",
    )
    LAYOUT_EXPORT_PATH = EnvConfig(
        name="LAYOUT_EXPORT_PATH",
        default=Path("test-builder-layout.json"),
        var_type=Path,
        description="Default file written by the export sink",
        category="export",
    )

    # -------------------------------------------------------------------------
    # Canvas
    # -------------------------------------------------------------------------
    LAYOUT_CONTAINER_WIDTH = EnvConfig(
        name="LAYOUT_CONTAINER_WIDTH",
        default=1200,
        var_type=int,
        description="Rendered container width in pixels",
        category="canvas",
    )
    LAYOUT_CONTAINER_HEIGHT = EnvConfig(
        name="LAYOUT_CONTAINER_HEIGHT",
        default=800,
        var_type=int,
        description="Rendered container height in pixels",
        category="canvas",
    )


# =============================================================================
# Conversion
# =============================================================================


def _to_int(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


_CONVERTERS: dict[type, Callable[[str], Any]] = {
    str: str,
    int: _to_int,
    Path: Path,
}


def _convert_value(raw: str | None, var_type: type, default: Any) -> Any:
    """Turn a raw environment string into ``var_type``.

    Unset variables and values the converter rejects (returns None for)
    resolve to ``default``.
    """
    if raw is None:
        return default
    converter = _CONVERTERS.get(var_type, str)
    value = converter(raw)
    return default if value is None else value


# =============================================================================
# Lookup
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Resolve a variable's value.

    An override that is not None wins outright; otherwise the environment is
    consulted and the raw string converted to the declared type, falling back
    to the declared default.

    Args:
        env_var: Variable to resolve.
        override: Caller-supplied value, typically from a CLI flag.

    Returns:
        The resolved value.
    """
    if override is not None:
        return override
    config: EnvConfig = env_var.value
    return _convert_value(os.environ.get(config.name), config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Declaration behind an EnvVar member."""
    return env_var.value


# =============================================================================
# Convenience Getters
# =============================================================================


def get_container_size(
    width: int | None = None, height: int | None = None
) -> tuple[int, int]:
    """Container size for callers without a live rendered rect.

    Each dimension resolves independently: argument, then
    LAYOUT_CONTAINER_WIDTH / LAYOUT_CONTAINER_HEIGHT, then 1200x800.
    """
    return (
        get_environment(EnvVar.LAYOUT_CONTAINER_WIDTH, override=width),
        get_environment(EnvVar.LAYOUT_CONTAINER_HEIGHT, override=height),
    )


def get_export_path(override: Path | str | None = None) -> Path:
    """File the export sink writes to."""
    if override is not None:
        return Path(override)
    return get_environment(EnvVar.LAYOUT_EXPORT_PATH)


def get_project_name(override: str | None = None) -> str:
    """Project name stamped into exported documents."""
    return get_environment(EnvVar.LAYOUT_PROJECT_NAME, override=override)


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """Declared variables in declaration order.

    Args:
        category: Only return variables in this category (logging, export,
            canvas). None returns all of them.
    """
    if category is None:
        return list(EnvVar)
    return [var for var in EnvVar if var.value.category == category]


__all__ = [
    "EnvConfig",
    "EnvVar",
    "get_environment",
    "get_environment_info",
    "get_container_size",
    "get_export_path",
    "get_project_name",
    "list_environment_variables",
]
