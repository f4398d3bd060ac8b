"""Interactive move and resize sessions.

A session binds one element for the length of a pointer drag. Everything the
transform needs is captured when the session begins, and every pointer update
is a full recomputation from that snapshot, so updates can be applied in any
number without drift.

TransformSession is a small state machine::

    IDLE --begin_move--> MOVING   --end_move-->   IDLE
    IDLE --begin_resize--> RESIZING --end_resize--> IDLE

Only one session can be active at a time.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from layout_builder.core.errors import SessionConflictError, SessionStateError
from layout_builder.geometry import ContainerRect, Point, Size, clamp, to_percent
from layout_builder.model import CanvasElement

logger = logging.getLogger(__name__)

MIN_RESIZE_WIDTH = 40
RESIZE_EDGE_MARGIN = 2


class SessionState(str, Enum):
    """States of the transform state machine."""

    IDLE = "idle"
    MOVING = "moving"
    RESIZING = "resizing"


@dataclass(frozen=True)
class MoveSession:
    """Snapshot taken when a move begins."""

    element_id: int
    start_pointer: Point
    start_position: Point
    size: Size
    container: ContainerRect


@dataclass(frozen=True)
class ResizeSession:
    """Snapshot taken when a resize begins.

    The anchor is the element's top-left corner and stays fixed; aspect is
    start width over start height.
    """

    element_id: int
    start_pointer: Point
    start_size: Size
    anchor: Point
    container: ContainerRect
    aspect: float


@dataclass(frozen=True)
class MoveUpdate:
    """New position for the moving element."""

    element_id: int
    x: float
    y: float
    percent_x: float
    percent_y: float


@dataclass(frozen=True)
class ResizeUpdate:
    """New size for the resizing element."""

    element_id: int
    width: float
    height: float


def compute_move(session: MoveSession, pointer: Point) -> MoveUpdate:
    """Position for a pointer at ``pointer`` during a move.

    The pointer delta is added to the start position and each axis is
    clamped to [0, container - element].
    """
    dx = pointer.x - session.start_pointer.x
    dy = pointer.y - session.start_pointer.y
    container = session.container

    x = clamp(session.start_position.x + dx, 0, container.width - session.size.width)
    y = clamp(session.start_position.y + dy, 0, container.height - session.size.height)

    return MoveUpdate(
        element_id=session.element_id,
        x=x,
        y=y,
        percent_x=to_percent(x, container.width),
        percent_y=to_percent(y, container.height),
    )


def compute_resize(session: ResizeSession, pointer: Point) -> ResizeUpdate:
    """Size for a pointer at ``pointer`` during a resize.

    Only horizontal movement counts. Width is floored at MIN_RESIZE_WIDTH and
    height follows the aspect ratio. The container limits are applied in two
    passes, width first and then height; the height pass can shrink the width
    below what the width pass allowed.
    """
    dx = pointer.x - session.start_pointer.x
    aspect = session.aspect

    width = max(MIN_RESIZE_WIDTH, session.start_size.width + dx)
    height = width / aspect

    max_width = session.container.width - session.anchor.x - RESIZE_EDGE_MARGIN
    max_height = session.container.height - session.anchor.y - RESIZE_EDGE_MARGIN

    if width > max_width:
        width = max_width
        height = width / aspect
    if height > max_height:
        height = max_height
        width = height * aspect

    return ResizeUpdate(element_id=session.element_id, width=width, height=height)


class TransformSession:
    """Exclusive owner of the in-flight move or resize interaction.

    Example:
        >>> session = TransformSession()
        >>> session.begin_move(element, Point(10, 10), container)
        >>> update = session.update_move(Point(30, 15))
        >>> session.end_move()
    """

    def __init__(self):
        self._active: MoveSession | ResizeSession | None = None

    @property
    def state(self) -> SessionState:
        """Current state of the machine."""
        if isinstance(self._active, MoveSession):
            return SessionState.MOVING
        if isinstance(self._active, ResizeSession):
            return SessionState.RESIZING
        return SessionState.IDLE

    @property
    def active(self) -> MoveSession | ResizeSession | None:
        """The active session snapshot, if any."""
        return self._active

    @property
    def element_id(self) -> int | None:
        """Id of the element bound to the active session."""
        return self._active.element_id if self._active else None

    def _ensure_idle(self) -> None:
        if self._active is not None:
            raise SessionConflictError(
                f"Cannot start a new session while {self.state.value} "
                f"element {self._active.element_id}"
            )

    def _ensure_not(self, other: SessionState, action: str) -> None:
        if self.state == other:
            raise SessionStateError(f"Cannot {action} while {other.value}")

    # -------------------------------------------------------------------------
    # Move
    # -------------------------------------------------------------------------

    def begin_move(
        self, element: CanvasElement, pointer: Point, container: ContainerRect
    ) -> MoveSession:
        """Start moving ``element`` from pointer position ``pointer``.

        Raises:
            SessionConflictError: If a session is already active.
        """
        self._ensure_idle()
        self._active = MoveSession(
            element_id=element.id,
            start_pointer=pointer,
            start_position=element.position,
            size=element.size,
            container=container,
        )
        logger.debug(f"Move session started for element {element.id}")
        return self._active

    def update_move(self, pointer: Point) -> MoveUpdate | None:
        """Compute the moving element's position for a pointer event.

        Returns:
            MoveUpdate, or None when no session is active.

        Raises:
            SessionStateError: If a resize session is active.
        """
        self._ensure_not(SessionState.RESIZING, "update a move")
        if self._active is None:
            return None
        return compute_move(self._active, pointer)

    def end_move(self) -> None:
        """Finish the move session.

        Raises:
            SessionStateError: If a resize session is active.
        """
        self._ensure_not(SessionState.RESIZING, "end a move")
        self.end()

    # -------------------------------------------------------------------------
    # Resize
    # -------------------------------------------------------------------------

    def begin_resize(
        self, element: CanvasElement, pointer: Point, container: ContainerRect
    ) -> ResizeSession:
        """Start resizing ``element`` from pointer position ``pointer``.

        Raises:
            SessionConflictError: If a session is already active.
        """
        self._ensure_idle()
        aspect = element.width / element.height if element.height else 1
        self._active = ResizeSession(
            element_id=element.id,
            start_pointer=pointer,
            start_size=element.size,
            anchor=element.position,
            container=container,
            aspect=aspect or 1,
        )
        logger.debug(f"Resize session started for element {element.id}")
        return self._active

    def update_resize(self, pointer: Point) -> ResizeUpdate | None:
        """Compute the resizing element's size for a pointer event.

        Returns:
            ResizeUpdate, or None when no session is active.

        Raises:
            SessionStateError: If a move session is active.
        """
        self._ensure_not(SessionState.MOVING, "update a resize")
        if self._active is None:
            return None
        return compute_resize(self._active, pointer)

    def end_resize(self) -> None:
        """Finish the resize session.

        Raises:
            SessionStateError: If a move session is active.
        """
        self._ensure_not(SessionState.MOVING, "end a resize")
        self.end()

    def end(self) -> None:
        """Discard whatever session is active. The last update stands."""
        if self._active is not None:
            logger.debug(
                f"{self.state.value.capitalize()} session ended for element "
                f"{self._active.element_id}"
            )
        self._active = None


__all__ = [
    "MIN_RESIZE_WIDTH",
    "RESIZE_EDGE_MARGIN",
    "SessionState",
    "MoveSession",
    "ResizeSession",
    "MoveUpdate",
    "ResizeUpdate",
    "compute_move",
    "compute_resize",
    "TransformSession",
]
