"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env, isolates LAYOUT_* variables per test)
- Tier marking for tests under tests/
- Shared canvas fixtures
"""

import os
from datetime import UTC, datetime
from pathlib import Path

import pytest
from dotenv import load_dotenv

from layout_builder.canvas import CanvasController
from layout_builder.config import EnvVar
from layout_builder.geometry import ContainerRect, Point
from layout_builder.model import CanvasElement
from layout_builder.schema import ElementType

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Configuration Constants
# =============================================================================

TESTS_DIR = Path(__file__).parent / "tests"
FIXED_NOW = datetime(2026, 3, 14, 9, 26, 53, 589000, tzinfo=UTC)


# =============================================================================
# Collection Hooks
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    """Mark tests under tests/ as integration unless they declare a tier."""
    integration = pytest.mark.integration

    for item in items:
        if "unit" in item.keywords or "integration" in item.keywords:
            continue
        if TESTS_DIR in Path(str(item.path)).parents:
            item.add_marker(integration)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_layout_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove LAYOUT_* variables so defaults apply unless a test sets them."""
    for var in EnvVar:
        if var.value.name in os.environ:
            monkeypatch.delenv(var.value.name)


# =============================================================================
# Canvas Fixtures
# =============================================================================


@pytest.fixture
def container() -> ContainerRect:
    """The default 1200x800 container at the page origin."""
    return ContainerRect.of_size(1200, 800)


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed export timestamp."""
    return FIXED_NOW


@pytest.fixture
def sample_canvas(container: ContainerRect) -> CanvasController:
    """Controller holding one element of every type, placed without overlap."""
    controller = CanvasController()
    controller.drop_element(ElementType.HEADER, Point(0, 0), container)
    controller.drop_element(ElementType.SLIDER, Point(0, 80), container)
    controller.drop_element(ElementType.CARD, Point(40, 500), container)
    controller.drop_element(ElementType.TEXT, Point(400, 500), container)
    controller.drop_element(ElementType.FOOTER, Point(0, 720), container)
    return controller


@pytest.fixture
def messy_elements() -> list[CanvasElement]:
    """Elements with duplicate, zero, absent and negative z-index values."""
    specs = [
        (ElementType.HEADER, 0, 0, 1200, 80, 1),
        (ElementType.CARD, 40, 100, 300, 200, 2),
        (ElementType.CARD, 380, 100, 300, 200, 2),
        (ElementType.TEXT, 720, 100, 400, 100, 4),
        (ElementType.SLIDER, 0, 320, 1200, 400, 0),
        (ElementType.FOOTER, 0, 740, 1200, 60, None),
        (ElementType.CARD, 40, 100, 300, 200, -3),
    ]
    return [
        CanvasElement(
            id=index,
            type=element_type,
            x=x,
            y=y,
            width=width,
            height=height,
            percent_x=x / 12,
            percent_y=y / 8,
            z_index=z_index,
        )
        for index, (element_type, x, y, width, height, z_index) in enumerate(
            specs, start=1
        )
    ]
