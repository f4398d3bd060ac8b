"""Unit tests for the placement resolver."""

import pytest

from layout_builder.geometry import Box, ContainerRect, Point
from layout_builder.model import CanvasElement
from layout_builder.placement import (
    MAX_PLACEMENT_SHIFTS,
    PlacementStatus,
    preview_drop,
    resolve_placement,
)
from layout_builder.schema import ElementType

CONTAINER = ContainerRect.of_size(1200, 800)


def _card(element_id: int, x: float, y: float, z_index: int | None = 2) -> CanvasElement:
    return CanvasElement(
        id=element_id,
        type=ElementType.CARD,
        x=x,
        y=y,
        width=300,
        height=200,
        z_index=z_index,
    )


class TestResolvePlacement:
    """Tests for resolve_placement."""

    @pytest.mark.unit
    def test_empty_canvas_keeps_snapped_point(self):
        result = resolve_placement(ElementType.CARD, Point(47, 93), CONTAINER, [])
        assert result.box == Box(40, 100, 300, 200)
        assert result.status == PlacementStatus.PLACED
        assert result.shifts == 0

    @pytest.mark.unit
    def test_first_element_z_index(self):
        """An empty canvas counts as max z-index 1."""
        result = resolve_placement(ElementType.CARD, Point(0, 0), CONTAINER, [])
        assert result.z_index == 2

    @pytest.mark.unit
    def test_z_index_above_existing(self):
        existing = [_card(1, 600, 0, z_index=7), _card(2, 600, 300, z_index=3)]
        result = resolve_placement(ElementType.CARD, Point(0, 0), CONTAINER, existing)
        assert result.z_index == 8

    @pytest.mark.unit
    def test_percent_uses_rendered_container(self):
        container = ContainerRect.of_size(1000, 500)
        result = resolve_placement(ElementType.CARD, Point(200, 100), container, [])
        assert result.percent_x == pytest.approx(20.0)
        assert result.percent_y == pytest.approx(20.0)

    @pytest.mark.unit
    def test_same_cell_shifts_down(self):
        """A card dropped onto another card is pushed below it."""
        existing = [_card(1, 40, 100)]
        result = resolve_placement(ElementType.CARD, Point(40, 100), CONTAINER, existing)
        assert result.status == PlacementStatus.PLACED
        assert result.box.x == 40
        assert result.box.y == 300
        assert result.shifts == 10
        assert (result.box.y - 100) % 20 == 0

    @pytest.mark.unit
    def test_flush_against_existing(self):
        """Edge contact is allowed, so the box stops exactly at the bottom edge."""
        existing = [_card(1, 0, 0)]
        result = resolve_placement(ElementType.CARD, Point(0, 180), CONTAINER, existing)
        assert result.box.y == 200
        assert result.shifts == 1

    @pytest.mark.unit
    def test_shift_limit(self):
        """Persistent overlap is accepted after the maximum number of shifts."""
        tall = CanvasElement(
            id=1, type=ElementType.SLIDER, x=0, y=0, width=1200, height=5000, z_index=2
        )
        result = resolve_placement(ElementType.CARD, Point(0, 0), CONTAINER, [tall])
        assert result.status == PlacementStatus.RESIDUAL_OVERLAP
        assert not result.placed_cleanly
        assert result.shifts == MAX_PLACEMENT_SHIFTS
        assert result.box.y == MAX_PLACEMENT_SHIFTS * 20

    @pytest.mark.unit
    def test_residual_overlap_is_logged(self, caplog):
        tall = CanvasElement(
            id=1, type=ElementType.SLIDER, x=0, y=0, width=1200, height=5000
        )
        with caplog.at_level("WARNING", logger="layout_builder.placement.lib"):
            resolve_placement(ElementType.CARD, Point(0, 0), CONTAINER, [tall])
        assert "overlap" in caplog.text

    @pytest.mark.unit
    def test_full_width_size_from_container(self):
        container = ContainerRect.of_size(960, 600)
        result = resolve_placement(ElementType.HEADER, Point(3, 3), container, [])
        assert result.box == Box(0, 0, 960, 80)

    @pytest.mark.unit
    def test_to_element(self):
        result = resolve_placement(ElementType.TEXT, Point(100, 100), CONTAINER, [])
        element = result.to_element(element_id=5)
        assert element.id == 5
        assert element.type is ElementType.TEXT
        assert element.box == result.box
        assert element.z_index == result.z_index


class TestPreviewDrop:
    """Tests for preview_drop."""

    @pytest.mark.unit
    def test_free_spot_is_valid(self):
        preview = preview_drop(ElementType.CARD, Point(500, 500), CONTAINER, [])
        assert preview.is_over
        assert preview.valid
        assert preview.box == Box(500, 500, 300, 200)

    @pytest.mark.unit
    def test_collision_is_invalid(self):
        existing = [_card(1, 40, 100)]
        preview = preview_drop(ElementType.CARD, Point(50, 110), CONTAINER, existing)
        assert preview.is_over
        assert not preview.valid

    @pytest.mark.unit
    def test_no_shifting(self):
        """Preview does not search for a free spot."""
        existing = [_card(1, 40, 100)]
        preview = preview_drop(ElementType.CARD, Point(40, 100), CONTAINER, existing)
        assert preview.box == Box(40, 100, 300, 200)

    @pytest.mark.unit
    def test_outside_container(self):
        preview = preview_drop(ElementType.CARD, Point(-5, 10), CONTAINER, [])
        assert not preview.is_over
        assert not preview.valid
        assert preview.box is None

    @pytest.mark.unit
    def test_does_not_mutate(self):
        existing = [_card(1, 40, 100)]
        preview_drop(ElementType.CARD, Point(40, 100), CONTAINER, existing)
        assert existing[0].box == Box(40, 100, 300, 200)
