"""CLI commands for layout-builder."""

import argparse
import json
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

from layout_builder.canvas import CanvasController
from layout_builder.config import (
    EnvVar,
    get_container_size,
    get_environment,
    get_environment_info,
    get_export_path,
    get_project_name,
    list_environment_variables,
)
from layout_builder.core.log import get_logger, setup_logging
from layout_builder.export import dump_export_json, write_export_file
from layout_builder.geometry import ContainerRect, Point
from layout_builder.schema import ELEMENT_REGISTRY, ElementType
from layout_builder.validation import validate_document

logger = get_logger("cli")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2

# Drops used by the demo command, in container-local coordinates.
DEMO_DROPS: tuple[tuple[ElementType, Point], ...] = (
    (ElementType.HEADER, Point(0, 0)),
    (ElementType.SLIDER, Point(0, 80)),
    (ElementType.CARD, Point(40, 500)),
    (ElementType.CARD, Point(380, 500)),
    (ElementType.TEXT, Point(720, 500)),
    (ElementType.FOOTER, Point(0, 720)),
)


# =============================================================================
# Types Command
# =============================================================================


def cmd_types(_args: argparse.Namespace) -> int:
    """Print the element palette."""
    print("Element Palette")
    print("=" * 40)
    for element_type, meta in ELEMENT_REGISTRY.items():
        print(f"  {element_type.value:<8} {meta.label}")
        print(f"           {meta.description}")
        print(f"           {meta.meta}")
    return EXIT_OK


# =============================================================================
# Demo Command
# =============================================================================


def build_demo_canvas(width: int, height: int, project_name: str) -> CanvasController:
    """Lay out a small sample page through the controller."""
    controller = CanvasController(project_name=project_name)
    container = ContainerRect.of_size(width, height)

    for element_type, point in DEMO_DROPS:
        element = controller.drop_element(element_type, point, container)
        if not controller.last_placement.placed_cleanly:
            logger.warning(f"Demo element {element.id} overlaps its neighbours")

    # Keep the header above the slider.
    controller.select(1)
    controller.bring_to_front()
    controller.select(None)
    return controller


def cmd_demo(args: argparse.Namespace) -> int:
    """Build a sample layout, emit its export JSON and validate it."""
    width, height = get_container_size(args.width, args.height)
    controller = build_demo_canvas(width, height, get_project_name(args.project))
    document = controller.export_document()

    if args.output is None:
        print(dump_export_json(document))
    else:
        path = get_export_path(args.output or None)
        try:
            write_export_file(document, path)
        except OSError as e:
            logger.error(f"Could not write export to {path}: {e}")
            return EXIT_INVALID

    result = validate_document(document.to_dict())
    if result.is_valid:
        logger.info(f"Export valid ({document.metadata.total_elements} elements)")
        return EXIT_OK

    for message in result.errors:
        logger.error(message)
    return EXIT_INVALID


# =============================================================================
# Validate Command
# =============================================================================


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a layout JSON file.

    Exit codes: 0 valid, 1 invalid, 2 unreadable or not JSON.
    """
    path: Path = args.path
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.error(f"Could not read {path}: {e}")
        return EXIT_UNREADABLE
    except UnicodeDecodeError as e:
        logger.error(f"{path} is not UTF-8 text: {e}")
        return EXIT_UNREADABLE
    except json.JSONDecodeError as e:
        logger.error(f"{path} is not valid JSON: {e}")
        return EXIT_UNREADABLE

    result = validate_document(document)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif result.is_valid:
        print(f"{path}: valid")
    else:
        print(f"{path}: {len(result.errors)} error(s)")
        for message in result.errors:
            print(f"  - {message}")

    return EXIT_OK if result.is_valid else EXIT_INVALID


# =============================================================================
# Env Command
# =============================================================================


def cmd_env(args: argparse.Namespace) -> int:
    """Show configuration variables and their resolved values."""
    variables = list_environment_variables(args.category)
    if not variables:
        logger.error(f"Unknown category: {args.category}")
        return EXIT_INVALID

    for var in variables:
        info = get_environment_info(var)
        print(f"{info.name}={get_environment(var)}")
        print(f"    {info.description} (default: {info.default})")
    return EXIT_OK


# =============================================================================
# Test Command
# =============================================================================


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with tier options.

    Usage:
        python . test                # Run all tests
        python . test --unit         # Pure tests, no file system
        python . test --integration  # Cross-module and CLI tests
        python . test -k "resize"    # Extra arguments go to pytest
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--integration": ["-m", "integration"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []
    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


# =============================================================================
# Entry Point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for every command except ``test``."""
    parser = argparse.ArgumentParser(
        prog="layout-builder",
        description="Build, export and validate page layouts",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    types_parser = subparsers.add_parser("types", help="List the element palette")
    types_parser.set_defaults(func=cmd_types)

    demo_parser = subparsers.add_parser(
        "demo", help="Build a sample layout and export it"
    )
    demo_parser.add_argument(
        "--output",
        "-o",
        nargs="?",
        const="",
        default=None,
        help="Write the export to PATH (LAYOUT_EXPORT_PATH when omitted)",
    )
    demo_parser.add_argument(
        "--width", type=int, default=None, help="Container width in pixels"
    )
    demo_parser.add_argument(
        "--height", type=int, default=None, help="Container height in pixels"
    )
    demo_parser.add_argument(
        "--project", default=None, help="Project name for the export"
    )
    demo_parser.set_defaults(func=cmd_demo)

    validate_parser = subparsers.add_parser(
        "validate", help="Validate a layout JSON file"
    )
    validate_parser.add_argument("path", type=Path, help="Layout JSON file")
    validate_parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    validate_parser.set_defaults(func=cmd_validate)

    env_parser = subparsers.add_parser("env", help="Show configuration variables")
    env_parser.add_argument(
        "--category", default=None, help="Filter by category (logging, export, canvas)"
    )
    env_parser.set_defaults(func=cmd_env)

    # Listed for --help only; dispatched before parsing.
    subparsers.add_parser("test", help="Run the test suite (--unit, --integration)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    load_dotenv()
    setup_logging(get_environment(EnvVar.LAYOUT_LOG_LEVEL))

    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == "test":
        return cmd_test(argv[1:])

    args = build_parser().parse_args(argv)
    return args.func(args)


__all__ = ["build_parser", "main", "build_demo_canvas", "DEMO_DROPS"]
