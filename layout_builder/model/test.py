"""Unit tests for the canvas element model."""

import pytest
from pydantic import ValidationError

from layout_builder.geometry import Box, Point, Size
from layout_builder.model import CanvasElement, find_element
from layout_builder.schema import ElementType


class TestCanvasElement:
    """Tests for CanvasElement."""

    @pytest.mark.unit
    def test_minimal_element(self):
        """Only id, type and size are required."""
        element = CanvasElement(id=1, type=ElementType.CARD, width=300, height=200)
        assert element.x == 0
        assert element.y == 0
        assert element.percent_x == 0.0
        assert element.z_index is None

    @pytest.mark.unit
    def test_type_from_string(self):
        element = CanvasElement(id=1, type="text", width=400, height=100)
        assert element.type is ElementType.TEXT

    @pytest.mark.unit
    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            CanvasElement(id=1, type="carousel", width=10, height=10)

    @pytest.mark.unit
    def test_geometry_views(self):
        element = CanvasElement(
            id=3, type=ElementType.CARD, x=20, y=40, width=300, height=200
        )
        assert element.box == Box(20, 40, 300, 200)
        assert element.position == Point(20, 40)
        assert element.size == Size(300, 200)

    @pytest.mark.unit
    def test_negative_z_index_allowed(self):
        """z_index is a free-form sort key."""
        element = CanvasElement(
            id=1, type=ElementType.CARD, width=1, height=1, z_index=-4
        )
        assert element.z_index == -4

    @pytest.mark.unit
    def test_assignment_is_validated(self):
        element = CanvasElement(id=1, type=ElementType.CARD, width=1, height=1)
        with pytest.raises(ValidationError):
            element.z_index = "top"


class TestFindElement:
    """Tests for id lookup."""

    @pytest.mark.unit
    def test_found(self):
        elements = [
            CanvasElement(id=1, type=ElementType.CARD, width=1, height=1),
            CanvasElement(id=2, type=ElementType.TEXT, width=1, height=1),
        ]
        assert find_element(elements, 2) is elements[1]

    @pytest.mark.unit
    def test_missing(self):
        assert find_element([], 7) is None
