"""Unit tests for the canvas controller."""

from datetime import UTC, datetime

import pytest

from layout_builder.canvas import CanvasController, CanvasState
from layout_builder.core.errors import ElementNotFoundError, SessionConflictError
from layout_builder.geometry import Box, ContainerRect, Point
from layout_builder.interaction import SessionState
from layout_builder.placement import PlacementStatus
from layout_builder.schema import ElementType

CONTAINER = ContainerRect(left=0, top=0, width=1200, height=800)
NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)


@pytest.fixture
def controller() -> CanvasController:
    return CanvasController()


@pytest.fixture
def populated(controller) -> CanvasController:
    controller.drop_element(ElementType.HEADER, Point(0, 0), CONTAINER)
    controller.drop_element(ElementType.CARD, Point(40, 100), CONTAINER)
    controller.drop_element(ElementType.TEXT, Point(400, 100), CONTAINER)
    return controller


class TestDropElement:
    """Tests for placing elements through the controller."""

    @pytest.mark.unit
    def test_ids_increase(self, populated):
        assert [e.id for e in populated.elements] == [1, 2, 3]
        assert populated.state.next_id == 4

    @pytest.mark.unit
    def test_z_index_increases(self, populated):
        assert [e.z_index for e in populated.elements] == [2, 3, 4]

    @pytest.mark.unit
    def test_ids_never_reused(self, populated):
        populated.delete(3)
        element = populated.drop_element(ElementType.CARD, Point(800, 500), CONTAINER)
        assert element.id == 4

    @pytest.mark.unit
    def test_collision_shifts(self, populated):
        element = populated.drop_element(ElementType.CARD, Point(40, 100), CONTAINER)
        assert element.y == 300
        assert populated.last_placement.status == PlacementStatus.PLACED
        assert populated.last_placement.shifts == 10

    @pytest.mark.unit
    def test_percent_recorded(self, controller):
        container = ContainerRect.of_size(1000, 500)
        element = controller.drop_element(ElementType.CARD, Point(200, 100), container)
        assert element.percent_x == pytest.approx(20.0)
        assert element.percent_y == pytest.approx(20.0)

    @pytest.mark.unit
    def test_string_type(self, controller):
        element = controller.drop_element("slider", Point(0, 0), CONTAINER)
        assert element.type is ElementType.SLIDER
        assert element.box == Box(0, 0, 1200, 400)

    @pytest.mark.unit
    def test_preview_does_not_mutate(self, populated):
        preview = populated.preview_drop(ElementType.CARD, Point(40, 100), CONTAINER)
        assert preview.is_over and not preview.valid
        assert len(populated.elements) == 3


class TestSelection:
    """Tests for selection handling."""

    @pytest.mark.unit
    def test_select_and_clear(self, populated):
        populated.select(2)
        assert populated.selected_element.id == 2
        populated.select(None)
        assert populated.selected_element is None

    @pytest.mark.unit
    def test_select_unknown(self, populated):
        with pytest.raises(ElementNotFoundError):
            populated.select(99)


class TestSessions:
    """Tests for move/resize through the controller."""

    @pytest.mark.unit
    def test_move_applies_each_update(self, populated):
        populated.begin_move(2, Point(500, 500), CONTAINER)
        assert populated.session_state == SessionState.MOVING
        populated.update_move(Point(520, 540))
        card = populated.get_element(2)
        assert (card.x, card.y) == (60, 140)
        assert card.percent_x == pytest.approx(5.0)
        assert card.percent_y == pytest.approx(17.5)
        populated.update_move(Point(510, 500))
        assert (card.x, card.y) == (50, 100)
        populated.end_move()
        assert populated.session_state == SessionState.IDLE
        assert (card.x, card.y) == (50, 100)

    @pytest.mark.unit
    def test_move_stays_in_container(self, populated):
        populated.begin_move(2, Point(0, 0), CONTAINER)
        populated.update_move(Point(9000, 9000))
        card = populated.get_element(2)
        assert (card.x, card.y) == (900, 600)

    @pytest.mark.unit
    def test_resize_applies(self, populated):
        populated.begin_resize(2, Point(340, 300), CONTAINER)
        populated.update_resize(Point(400, 300))
        card = populated.get_element(2)
        assert card.width == 360
        assert card.height == pytest.approx(240)
        assert (card.x, card.y) == (40, 100)
        populated.end_resize()

    @pytest.mark.unit
    def test_resize_floor(self, populated):
        populated.begin_resize(2, Point(0, 0), CONTAINER)
        populated.update_resize(Point(-5000, 0))
        assert populated.get_element(2).width == 40

    @pytest.mark.unit
    def test_exclusive_sessions(self, populated):
        populated.begin_move(1, Point(0, 0), CONTAINER)
        with pytest.raises(SessionConflictError):
            populated.begin_resize(2, Point(0, 0), CONTAINER)

    @pytest.mark.unit
    def test_begin_unknown_element(self, populated):
        with pytest.raises(ElementNotFoundError):
            populated.begin_move(42, Point(0, 0), CONTAINER)
        assert populated.session_state == SessionState.IDLE

    @pytest.mark.unit
    def test_stray_update_ignored(self, populated):
        assert populated.update_move(Point(10, 10)) is None

    @pytest.mark.unit
    def test_delete_ends_bound_session(self, populated):
        populated.begin_move(2, Point(0, 0), CONTAINER)
        populated.delete(2)
        assert populated.session_state == SessionState.IDLE


class TestZOrderAndDelete:
    """Tests for z-order and delete through the controller."""

    @pytest.mark.unit
    def test_bring_selection_to_front(self, populated):
        populated.select(1)
        populated.bring_to_front()
        assert populated.get_element(1).z_index == 5

    @pytest.mark.unit
    def test_send_to_back_by_id(self, populated):
        populated.send_to_back(3)
        assert populated.get_element(3).z_index == 0

    @pytest.mark.unit
    def test_no_selection_is_noop(self, populated):
        assert populated.bring_to_front() is None
        assert populated.send_to_back() is None
        assert populated.delete() is False
        assert len(populated.elements) == 3

    @pytest.mark.unit
    def test_delete_selected(self, populated):
        populated.select(2)
        assert populated.delete() is True
        assert [e.id for e in populated.elements] == [1, 3]
        assert populated.state.selected_id is None

    @pytest.mark.unit
    def test_delete_other_keeps_selection(self, populated):
        populated.select(2)
        populated.delete(3)
        assert populated.state.selected_id == 2

    @pytest.mark.unit
    def test_delete_unknown(self, populated):
        assert populated.delete(99) is False

    @pytest.mark.unit
    def test_clear(self, populated):
        populated.select(1)
        populated.clear()
        assert populated.elements == []
        assert populated.state.selected_id is None
        assert populated.state.next_id == 4


class TestObservers:
    """Tests for state observers."""

    @pytest.mark.unit
    def test_notified_on_mutation(self, controller):
        seen: list[int] = []
        controller.subscribe(lambda state: seen.append(len(state.elements)))
        controller.drop_element(ElementType.CARD, Point(0, 0), CONTAINER)
        controller.bring_to_front(1)
        controller.delete(1)
        assert seen == [1, 1, 0]

    @pytest.mark.unit
    def test_receives_state(self, controller):
        received: list[CanvasState] = []
        controller.subscribe(received.append)
        controller.select(None)
        assert received == [controller.state]

    @pytest.mark.unit
    def test_unsubscribe(self, controller):
        calls: list[CanvasState] = []
        unsubscribe = controller.subscribe(calls.append)
        unsubscribe()
        unsubscribe()
        controller.drop_element(ElementType.CARD, Point(0, 0), CONTAINER)
        assert calls == []

    @pytest.mark.unit
    def test_preview_not_notified(self, controller):
        calls: list[CanvasState] = []
        controller.subscribe(calls.append)
        controller.preview_drop(ElementType.CARD, Point(0, 0), CONTAINER)
        assert calls == []


class TestExport:
    """Tests for export through the controller."""

    @pytest.mark.unit
    def test_export_and_validate(self, populated):
        populated.send_to_back(3)
        populated.bring_to_front(1)
        document = populated.export_document(now=NOW)
        types = [e.type for e in document.elements]
        assert types == ["text-content", "card", "header"]
        assert populated.validate_export(now=NOW).is_valid

    @pytest.mark.unit
    def test_project_name(self):
        controller = CanvasController(project_name="Campaign")
        assert controller.export_document(now=NOW).project.name == "Campaign"
