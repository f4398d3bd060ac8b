"""Unit tests for interactive transform sessions."""

import pytest

from layout_builder.core.errors import SessionConflictError, SessionStateError
from layout_builder.geometry import ContainerRect, Point
from layout_builder.interaction import (
    MIN_RESIZE_WIDTH,
    SessionState,
    TransformSession,
)
from layout_builder.model import CanvasElement
from layout_builder.schema import ElementType

CONTAINER = ContainerRect(left=100, top=50, width=1000, height=600)


@pytest.fixture
def card() -> CanvasElement:
    return CanvasElement(
        id=1, type=ElementType.CARD, x=100, y=100, width=300, height=200, z_index=2
    )


@pytest.fixture
def session() -> TransformSession:
    return TransformSession()


class TestStateMachine:
    """Tests for session transitions."""

    @pytest.mark.unit
    def test_initial_state_idle(self, session):
        assert session.state == SessionState.IDLE
        assert session.active is None
        assert session.element_id is None

    @pytest.mark.unit
    def test_move_lifecycle(self, session, card):
        session.begin_move(card, Point(0, 0), CONTAINER)
        assert session.state == SessionState.MOVING
        assert session.element_id == 1
        session.end_move()
        assert session.state == SessionState.IDLE

    @pytest.mark.unit
    def test_resize_lifecycle(self, session, card):
        session.begin_resize(card, Point(0, 0), CONTAINER)
        assert session.state == SessionState.RESIZING
        session.end_resize()
        assert session.state == SessionState.IDLE

    @pytest.mark.unit
    def test_begin_while_moving_conflicts(self, session, card):
        session.begin_move(card, Point(0, 0), CONTAINER)
        with pytest.raises(SessionConflictError):
            session.begin_resize(card, Point(0, 0), CONTAINER)
        with pytest.raises(SessionConflictError):
            session.begin_move(card, Point(0, 0), CONTAINER)
        assert session.state == SessionState.MOVING

    @pytest.mark.unit
    def test_begin_while_resizing_conflicts(self, session, card):
        session.begin_resize(card, Point(0, 0), CONTAINER)
        with pytest.raises(SessionConflictError):
            session.begin_move(card, Point(0, 0), CONTAINER)

    @pytest.mark.unit
    def test_mismatched_update_raises(self, session, card):
        session.begin_resize(card, Point(0, 0), CONTAINER)
        with pytest.raises(SessionStateError):
            session.update_move(Point(5, 5))
        with pytest.raises(SessionStateError):
            session.end_move()

    @pytest.mark.unit
    def test_mismatched_resize_update_raises(self, session, card):
        session.begin_move(card, Point(0, 0), CONTAINER)
        with pytest.raises(SessionStateError):
            session.update_resize(Point(5, 5))
        with pytest.raises(SessionStateError):
            session.end_resize()

    @pytest.mark.unit
    def test_updates_while_idle_are_ignored(self, session):
        assert session.update_move(Point(5, 5)) is None
        assert session.update_resize(Point(5, 5)) is None

    @pytest.mark.unit
    def test_end_while_idle_is_noop(self, session):
        session.end_move()
        session.end_resize()
        session.end()
        assert session.state == SessionState.IDLE

    @pytest.mark.unit
    def test_new_session_after_end(self, session, card):
        session.begin_move(card, Point(0, 0), CONTAINER)
        session.end_move()
        session.begin_resize(card, Point(0, 0), CONTAINER)
        assert session.state == SessionState.RESIZING


class TestMove:
    """Tests for move math."""

    @pytest.mark.unit
    def test_delta_applied(self, session, card):
        session.begin_move(card, Point(500, 300), CONTAINER)
        update = session.update_move(Point(530, 290))
        assert (update.x, update.y) == (130, 90)

    @pytest.mark.unit
    def test_percent_from_container(self, session, card):
        session.begin_move(card, Point(0, 0), CONTAINER)
        update = session.update_move(Point(100, 50))
        assert update.x == 200
        assert update.percent_x == pytest.approx(20.0)
        assert update.y == 150
        assert update.percent_y == pytest.approx(25.0)

    @pytest.mark.unit
    def test_clamped_at_origin(self, session, card):
        session.begin_move(card, Point(0, 0), CONTAINER)
        update = session.update_move(Point(-1000, -1000))
        assert (update.x, update.y) == (0, 0)

    @pytest.mark.unit
    def test_clamped_at_far_edge(self, session, card):
        session.begin_move(card, Point(0, 0), CONTAINER)
        update = session.update_move(Point(5000, 5000))
        assert update.x == CONTAINER.width - card.width
        assert update.y == CONTAINER.height - card.height

    @pytest.mark.unit
    @pytest.mark.parametrize("dx,dy", [(-999, 3), (12, -450), (777, 777), (0, 0), (450, 90)])
    def test_never_outside_bounds(self, session, card, dx, dy):
        session.begin_move(card, Point(0, 0), CONTAINER)
        update = session.update_move(Point(dx, dy))
        assert 0 <= update.x <= CONTAINER.width - card.width
        assert 0 <= update.y <= CONTAINER.height - card.height

    @pytest.mark.unit
    def test_updates_are_absolute(self, session, card):
        """Each update recomputes from the session start, not the last update."""
        session.begin_move(card, Point(0, 0), CONTAINER)
        session.update_move(Point(50, 50))
        update = session.update_move(Point(10, 0))
        assert (update.x, update.y) == (110, 100)


class TestResize:
    """Tests for resize math."""

    @pytest.mark.unit
    def test_keeps_aspect(self, session, card):
        session.begin_resize(card, Point(0, 0), CONTAINER)
        update = session.update_resize(Point(150, 0))
        assert update.width == 450
        assert update.height == pytest.approx(300)

    @pytest.mark.unit
    def test_vertical_motion_ignored(self, session, card):
        session.begin_resize(card, Point(0, 0), CONTAINER)
        update = session.update_resize(Point(0, 250))
        assert (update.width, update.height) == (300, 200)

    @pytest.mark.unit
    @pytest.mark.parametrize("dx", [-260, -299, -300, -10_000])
    def test_width_floor(self, session, card, dx):
        session.begin_resize(card, Point(0, 0), CONTAINER)
        update = session.update_resize(Point(dx, 0))
        assert update.width == MIN_RESIZE_WIDTH
        assert update.height == pytest.approx(MIN_RESIZE_WIDTH / 1.5)

    @pytest.mark.unit
    def test_width_limit(self, session):
        """Width stops 2px short of the container's right edge."""
        slim = CanvasElement(
            id=2, type=ElementType.TEXT, x=600, y=0, width=100, height=10
        )
        session.begin_resize(slim, Point(0, 0), CONTAINER)
        update = session.update_resize(Point(900, 0))
        assert update.width == 398
        assert update.height == pytest.approx(39.8)

    @pytest.mark.unit
    def test_height_limit_shrinks_width_further(self, session):
        """The height pass runs after the width pass and can cut width again."""
        square = CanvasElement(
            id=3, type=ElementType.CARD, x=100, y=400, width=100, height=100
        )
        session.begin_resize(square, Point(0, 0), CONTAINER)
        update = session.update_resize(Point(2000, 0))
        # Width pass: 1000 - 100 - 2 = 898. Height pass: 600 - 400 - 2 = 198.
        assert update.height == 198
        assert update.width == pytest.approx(198)

    @pytest.mark.unit
    def test_zero_height_uses_unit_aspect(self, session):
        flat = CanvasElement(id=4, type=ElementType.CARD, x=0, y=0, width=100, height=0)
        resize = session.begin_resize(flat, Point(0, 0), CONTAINER)
        assert resize.aspect == 1
        update = session.update_resize(Point(20, 0))
        assert (update.width, update.height) == (120, 120)

    @pytest.mark.unit
    def test_anchor_captured(self, session, card):
        resize = session.begin_resize(card, Point(0, 0), CONTAINER)
        assert (resize.anchor.x, resize.anchor.y) == (100, 100)
        assert resize.aspect == pytest.approx(1.5)
