"""Exception hierarchy for layout-builder.

Pure operations (geometry, placement, export, validation) report problems
through their result objects. Exceptions are reserved for protocol misuse of
the stateful parts: the interaction session and the canvas controller.
"""


class LayoutBuilderError(Exception):
    """Base class for all layout-builder errors."""


class ElementNotFoundError(LayoutBuilderError, KeyError):
    """Raised when an operation names an element id that is not on the canvas."""

    def __init__(self, element_id: int):
        self.element_id = element_id
        super().__init__(f"No element with id {element_id} on the canvas")

    def __str__(self) -> str:
        return self.args[0]


class SessionConflictError(LayoutBuilderError):
    """Raised when a session is started while another one is still active."""


class SessionStateError(LayoutBuilderError):
    """Raised when a session call does not match the active session kind."""


__all__ = [
    "LayoutBuilderError",
    "ElementNotFoundError",
    "SessionConflictError",
    "SessionStateError",
]
