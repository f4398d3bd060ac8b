"""Unit tests for z-order bookkeeping."""

import pytest

from layout_builder.model import CanvasElement
from layout_builder.schema import ElementType
from layout_builder.zorder import (
    bring_to_front,
    delete_element,
    effective_z_index,
    max_z_index,
    min_z_index,
    next_front_z_index,
    rank_by_z_index,
    send_to_back,
)


def _element(element_id: int, z_index: int | None) -> CanvasElement:
    return CanvasElement(
        id=element_id, type=ElementType.CARD, width=300, height=200, z_index=z_index
    )


class TestEffectiveZIndex:
    """Tests for the legacy z-index coercion."""

    @pytest.mark.unit
    def test_absent_ranks_as_one(self):
        assert effective_z_index(None) == 1

    @pytest.mark.unit
    def test_zero_ranks_as_one(self):
        """An explicit 0 is coerced like an absent value."""
        assert effective_z_index(0) == 1

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [-3, -1, 1, 2, 17])
    def test_other_values_unchanged(self, value):
        assert effective_z_index(value) == value


class TestExtremes:
    """Tests for max/min helpers."""

    @pytest.mark.unit
    def test_empty_collection(self):
        assert max_z_index([]) == 1
        assert min_z_index([]) == 1
        assert next_front_z_index([]) == 2

    @pytest.mark.unit
    def test_max_floor_is_one(self):
        assert max_z_index([_element(1, -5), _element(2, -1)]) == 1

    @pytest.mark.unit
    def test_min_ceiling_is_one(self):
        assert min_z_index([_element(1, 4), _element(2, 9)]) == 1

    @pytest.mark.unit
    def test_accepts_generators(self):
        elements = [_element(1, 3), _element(2, 7)]
        assert max_z_index(e for e in elements) == 7


class TestBringToFront:
    """Tests for bring_to_front."""

    @pytest.mark.unit
    def test_moves_above_max(self):
        elements = [_element(1, 2), _element(2, 5), _element(3, 3)]
        updated = bring_to_front(elements, 1)
        assert updated is elements[0]
        assert elements[0].z_index == 6

    @pytest.mark.unit
    def test_others_untouched(self):
        elements = [_element(1, 2), _element(2, 5)]
        bring_to_front(elements, 1)
        assert elements[1].z_index == 5

    @pytest.mark.unit
    def test_all_negative_uses_floor(self):
        elements = [_element(1, -2), _element(2, -7)]
        bring_to_front(elements, 2)
        assert elements[1].z_index == 2

    @pytest.mark.unit
    def test_unknown_id(self):
        elements = [_element(1, 2)]
        assert bring_to_front(elements, 99) is None
        assert elements[0].z_index == 2

    @pytest.mark.unit
    def test_repeated_front_grows(self):
        """Bringing the top element forward again still increments."""
        elements = [_element(1, 2)]
        bring_to_front(elements, 1)
        bring_to_front(elements, 1)
        assert elements[0].z_index == 4


class TestSendToBack:
    """Tests for send_to_back."""

    @pytest.mark.unit
    def test_goes_below_ceiling(self):
        elements = [_element(1, 3), _element(2, 5)]
        send_to_back(elements, 2)
        assert elements[1].z_index == 0

    @pytest.mark.unit
    def test_can_go_negative(self):
        elements = [_element(1, -2), _element(2, 5)]
        send_to_back(elements, 2)
        assert elements[1].z_index == -3

    @pytest.mark.unit
    def test_zero_counts_as_one(self):
        """An element at 0 ranks as 1, so sending back again lands on 0."""
        elements = [_element(1, 0), _element(2, 4)]
        send_to_back(elements, 1)
        assert elements[0].z_index == 0

    @pytest.mark.unit
    def test_unknown_id(self):
        assert send_to_back([_element(1, 2)], 42) is None


class TestDeleteElement:
    """Tests for delete_element."""

    @pytest.mark.unit
    def test_removes_and_clears_selection(self):
        elements = [_element(1, 2), _element(2, 3)]
        remaining, selected = delete_element(elements, 1, selected_id=1)
        assert [e.id for e in remaining] == [2]
        assert selected is None

    @pytest.mark.unit
    def test_keeps_other_selection(self):
        elements = [_element(1, 2), _element(2, 3)]
        _, selected = delete_element(elements, 1, selected_id=2)
        assert selected == 2

    @pytest.mark.unit
    def test_no_renumbering(self):
        """Gaps remain after deletion."""
        elements = [_element(1, 2), _element(2, 3), _element(3, 4)]
        remaining, _ = delete_element(elements, 2)
        assert [e.z_index for e in remaining] == [2, 4]

    @pytest.mark.unit
    def test_unknown_id_is_noop(self):
        elements = [_element(1, 2)]
        remaining, selected = delete_element(elements, 9, selected_id=1)
        assert remaining == elements
        assert selected == 1


class TestRankByZIndex:
    """Tests for export ranking."""

    @pytest.mark.unit
    def test_ascending(self):
        elements = [_element(1, 5), _element(2, -1), _element(3, 2)]
        assert [e.id for e in rank_by_z_index(elements)] == [2, 3, 1]

    @pytest.mark.unit
    def test_stable_for_ties(self):
        """Ties keep collection order, with None and 0 tied at 1."""
        elements = [_element(1, 1), _element(2, None), _element(3, 0), _element(4, -1)]
        assert [e.id for e in rank_by_z_index(elements)] == [4, 1, 2, 3]
