"""Canvas state and the controller that owns it.

All mutations of the element collection go through CanvasController so that
id assignment, selection, the active transform session and observer
notification stay consistent. Observers are plain callables that receive the
state after every change.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from layout_builder import zorder
from layout_builder.core.errors import ElementNotFoundError
from layout_builder.export import PROJECT_NAME, ExportDocument, build_export_document
from layout_builder.geometry import ContainerRect, Point
from layout_builder.interaction import (
    MoveUpdate,
    ResizeUpdate,
    SessionState,
    TransformSession,
)
from layout_builder.model import CanvasElement, find_element
from layout_builder.placement import (
    DropPreview,
    PlacementResult,
    preview_drop,
    resolve_placement,
)
from layout_builder.schema import ElementType
from layout_builder.validation import ValidationResult, validate_document

logger = logging.getLogger(__name__)

Observer = Callable[["CanvasState"], None]


@dataclass
class CanvasState:
    """Mutable canvas state.

    Attributes:
        elements: Elements in creation order.
        selected_id: Id of the selected element, if any.
        next_id: Id the next placed element will receive.
    """

    elements: list[CanvasElement] = field(default_factory=list)
    selected_id: int | None = None
    next_id: int = 1


class CanvasController:
    """Owner of the canvas state and entry point for every mutation.

    Example:
        >>> controller = CanvasController()
        >>> rect = ContainerRect.of_size(1200, 800)
        >>> element = controller.drop_element(ElementType.CARD, Point(40, 100), rect)
        >>> controller.bring_to_front(element.id)
        >>> document = controller.export_document()
    """

    def __init__(self, project_name: str = PROJECT_NAME):
        self._state = CanvasState()
        self._session = TransformSession()
        self._observers: list[Observer] = []
        self._project_name = project_name
        self.last_placement: PlacementResult | None = None

    # -------------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------------

    @property
    def state(self) -> CanvasState:
        return self._state

    @property
    def elements(self) -> list[CanvasElement]:
        return self._state.elements

    @property
    def session_state(self) -> SessionState:
        return self._session.state

    @property
    def selected_element(self) -> CanvasElement | None:
        """The selected element, or None."""
        if self._state.selected_id is None:
            return None
        return find_element(self._state.elements, self._state.selected_id)

    def get_element(self, element_id: int) -> CanvasElement:
        """Look up an element by id.

        Raises:
            ElementNotFoundError: If no element has that id.
        """
        element = find_element(self._state.elements, element_id)
        if element is None:
            raise ElementNotFoundError(element_id)
        return element

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer called with the state after each change.

        Returns:
            A callable that removes the observer.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self._state)

    # -------------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------------

    def preview_drop(
        self, element_type: ElementType, point: Point, container: ContainerRect
    ) -> DropPreview:
        """Hover feedback for a palette drag. Does not change state."""
        return preview_drop(element_type, point, container, self._state.elements)

    def drop_element(
        self, element_type: ElementType, point: Point, container: ContainerRect
    ) -> CanvasElement:
        """Place a new element at a drop point.

        Args:
            element_type: Palette type being dropped.
            point: Drop point in container-local coordinates.
            container: The container's rendered rect.

        Returns:
            The new element. The full placement outcome, including whether
            an overlap remained, is kept in ``last_placement``.
        """
        result = resolve_placement(element_type, point, container, self._state.elements)
        element = result.to_element(self._state.next_id)
        self._state.next_id += 1
        self._state.elements.append(element)
        self.last_placement = result
        logger.info(f"Added {element.type.value} element {element.id}")
        self._notify()
        return element

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, element_id: int | None) -> None:
        """Select an element, or clear the selection with None."""
        if element_id is not None:
            self.get_element(element_id)
        self._state.selected_id = element_id
        self._notify()

    # -------------------------------------------------------------------------
    # Transform sessions
    # -------------------------------------------------------------------------

    def begin_move(self, element_id: int, pointer: Point, container: ContainerRect) -> None:
        """Start dragging an element.

        Raises:
            ElementNotFoundError: If no element has that id.
            SessionConflictError: If a move or resize is already active.
        """
        self._session.begin_move(self.get_element(element_id), pointer, container)

    def update_move(self, pointer: Point) -> MoveUpdate | None:
        """Apply a pointer event to the element being moved."""
        update = self._session.update_move(pointer)
        if update is None:
            return None
        element = find_element(self._state.elements, update.element_id)
        if element is not None:
            element.x = update.x
            element.y = update.y
            element.percent_x = update.percent_x
            element.percent_y = update.percent_y
            self._notify()
        return update

    def end_move(self) -> None:
        self._session.end_move()

    def begin_resize(
        self, element_id: int, pointer: Point, container: ContainerRect
    ) -> None:
        """Start resizing an element from its bottom-right handle.

        Raises:
            ElementNotFoundError: If no element has that id.
            SessionConflictError: If a move or resize is already active.
        """
        self._session.begin_resize(self.get_element(element_id), pointer, container)

    def update_resize(self, pointer: Point) -> ResizeUpdate | None:
        """Apply a pointer event to the element being resized."""
        update = self._session.update_resize(pointer)
        if update is None:
            return None
        element = find_element(self._state.elements, update.element_id)
        if element is not None:
            element.width = update.width
            element.height = update.height
            self._notify()
        return update

    def end_resize(self) -> None:
        self._session.end_resize()

    # -------------------------------------------------------------------------
    # Z-order and deletion
    # -------------------------------------------------------------------------

    def _target_id(self, element_id: int | None) -> int | None:
        return self._state.selected_id if element_id is None else element_id

    def bring_to_front(self, element_id: int | None = None) -> CanvasElement | None:
        """Raise an element (the selection by default) above all others."""
        target_id = self._target_id(element_id)
        if target_id is None:
            return None
        element = zorder.bring_to_front(self._state.elements, target_id)
        if element is not None:
            self._notify()
        return element

    def send_to_back(self, element_id: int | None = None) -> CanvasElement | None:
        """Lower an element (the selection by default) below all others."""
        target_id = self._target_id(element_id)
        if target_id is None:
            return None
        element = zorder.send_to_back(self._state.elements, target_id)
        if element is not None:
            self._notify()
        return element

    def delete(self, element_id: int | None = None) -> bool:
        """Delete an element (the selection by default).

        An element bound to the active transform session ends that session.

        Returns:
            True if an element was removed.
        """
        target_id = self._target_id(element_id)
        if target_id is None:
            return False

        before = len(self._state.elements)
        self._state.elements, self._state.selected_id = zorder.delete_element(
            self._state.elements, target_id, self._state.selected_id
        )
        if len(self._state.elements) == before:
            return False

        if self._session.element_id == target_id:
            self._session.end()
        logger.info(f"Deleted element {target_id}")
        self._notify()
        return True

    def clear(self) -> None:
        """Remove every element. Ids keep counting from where they were."""
        self._session.end()
        self._state.elements = []
        self._state.selected_id = None
        self._notify()

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export_document(self, now: datetime | None = None) -> ExportDocument:
        """Build the export document for the current canvas."""
        return build_export_document(
            self._state.elements, now=now, project_name=self._project_name
        )

    def validate_export(self, now: datetime | None = None) -> ValidationResult:
        """Export the current canvas and validate the result."""
        return validate_document(self.export_document(now=now).to_dict())


__all__ = ["CanvasState", "CanvasController", "Observer"]
