"""Canvas element model."""

from .lib import CanvasElement, find_element

__all__ = ["CanvasElement", "find_element"]
