"""Centralized configuration management for layout-builder.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from layout_builder.config import EnvVar, get_environment
    >>>
    >>> level = get_environment(EnvVar.LAYOUT_LOG_LEVEL)  # "INFO"
    >>> width = get_environment(EnvVar.LAYOUT_CONTAINER_WIDTH)  # 1200

Environment Variable Categories:
    logging: Log level
    export: Project name and export file path
    canvas: Rendered container size for the CLI
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_container_size,
    get_environment,
    get_environment_info,
    get_export_path,
    get_project_name,
    # Introspection
    list_environment_variables,
)

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
