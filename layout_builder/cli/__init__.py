"""Command line interface for layout-builder.

Usage:
    python . types
    python . demo --output layout.json
    python . validate layout.json --json
    python . env --category canvas
    python . test --unit
"""

from .lib import build_parser, main

__all__ = ["build_parser", "main"]
