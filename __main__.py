"""CLI entry point for layout-builder.

Run from the repository root with ``python . <command>``.
"""

import sys

from layout_builder.cli import main

if __name__ == "__main__":
    sys.exit(main())
