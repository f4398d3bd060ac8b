"""Unit tests for the geometry engine."""

import pytest

from layout_builder.geometry import (
    Box,
    ContainerRect,
    Point,
    Size,
    clamp,
    overlaps,
    round_half_up,
    size_for,
    snap_to_grid,
    to_percent,
)
from layout_builder.schema import ElementType


class TestSizeFor:
    """Tests for default element sizes."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "element_type,height",
        [
            (ElementType.HEADER, 80),
            (ElementType.FOOTER, 60),
            (ElementType.SLIDER, 400),
        ],
    )
    def test_full_width_types(self, element_type, height):
        """Header, footer and slider stretch to the container width."""
        assert size_for(element_type, 960) == Size(960, height)

    @pytest.mark.unit
    def test_card_is_fixed(self):
        assert size_for(ElementType.CARD, 5000) == Size(300, 200)

    @pytest.mark.unit
    def test_text_capped_at_400(self):
        assert size_for(ElementType.TEXT, 1200) == Size(400, 100)

    @pytest.mark.unit
    def test_text_narrow_container(self):
        """Text takes 60% of a narrow container."""
        assert size_for(ElementType.TEXT, 500) == Size(300, 100)

    @pytest.mark.unit
    def test_string_type_accepted(self):
        assert size_for("card", 1200) == Size(300, 200)

    @pytest.mark.unit
    def test_unknown_type_default(self):
        assert size_for("carousel", 1200) == Size(200, 100)


class TestOverlaps:
    """Tests for the overlap test and its boundary policy."""

    @pytest.mark.unit
    def test_edge_touching_is_not_overlap(self):
        a = Box(0, 0, 10, 10)
        b = Box(10, 0, 10, 10)
        assert overlaps(a, b) is False
        assert overlaps(b, a) is False

    @pytest.mark.unit
    def test_vertical_edge_touching_is_not_overlap(self):
        assert overlaps(Box(0, 0, 10, 10), Box(0, 10, 10, 10)) is False

    @pytest.mark.unit
    def test_partial_overlap(self):
        assert overlaps(Box(0, 0, 10, 10), Box(5, 5, 10, 10)) is True

    @pytest.mark.unit
    def test_containment(self):
        assert overlaps(Box(0, 0, 100, 100), Box(10, 10, 5, 5)) is True

    @pytest.mark.unit
    def test_identical(self):
        box = Box(20, 40, 300, 200)
        assert overlaps(box, box) is True

    @pytest.mark.unit
    def test_disjoint(self):
        assert overlaps(Box(0, 0, 10, 10), Box(50, 50, 10, 10)) is False


class TestSnapping:
    """Tests for grid snapping and rounding."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [(0, 0), (9, 0), (10, 20), (29, 20), (31, 40), (-9, 0), (-11, -20)],
    )
    def test_snap_to_grid(self, value, expected):
        assert snap_to_grid(value) == expected

    @pytest.mark.unit
    def test_custom_grid(self):
        assert snap_to_grid(26, grid=10) == 30

    @pytest.mark.unit
    def test_round_half_up(self):
        """Halves round towards positive infinity."""
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(2.4) == 2


class TestHelpers:
    """Tests for clamp, percent and container helpers."""

    @pytest.mark.unit
    def test_clamp(self):
        assert clamp(5, 0, 10) == 5
        assert clamp(-3, 0, 10) == 0
        assert clamp(15, 0, 10) == 10

    @pytest.mark.unit
    def test_clamp_empty_range_prefers_low(self):
        """An element larger than its container pins to the origin."""
        assert clamp(50, 0, -20) == 0

    @pytest.mark.unit
    def test_to_percent(self):
        assert to_percent(300, 1200) == 25.0

    @pytest.mark.unit
    def test_to_percent_zero_dimension(self):
        assert to_percent(300, 0) == 0.0

    @pytest.mark.unit
    def test_container_to_local(self):
        rect = ContainerRect(left=100, top=50, width=800, height=600)
        assert rect.to_local(Point(150, 70)) == Point(50, 20)

    @pytest.mark.unit
    def test_container_contains_local(self):
        rect = ContainerRect.of_size(800, 600)
        assert rect.contains_local(Point(0, 0))
        assert rect.contains_local(Point(800, 600))
        assert not rect.contains_local(Point(-1, 10))
        assert not rect.contains_local(Point(10, 601))

    @pytest.mark.unit
    def test_box_shifted(self):
        assert Box(0, 0, 10, 10).shifted(dy=20) == Box(0, 20, 10, 10)
