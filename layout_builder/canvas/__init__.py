"""Canvas controller: the single owner of layout state."""

from .lib import CanvasController, CanvasState, Observer

__all__ = ["CanvasController", "CanvasState", "Observer"]
