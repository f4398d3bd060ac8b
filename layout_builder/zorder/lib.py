"""Z-order bookkeeping for canvas elements.

Raw z-index values are only a sort key. Front/back operations move one
element past the current extreme and never renumber the others, so gaps,
duplicates and negative values accumulate until export assigns a dense rank.
"""

import logging
from collections.abc import Iterable

from layout_builder.model import CanvasElement, find_element

logger = logging.getLogger(__name__)


def effective_z_index(value: int | None) -> int:
    """Z-index used for ranking.

    An absent z-index and an explicit 0 both rank as 1. Only z-index goes
    through this coercion.
    """
    if value is None or value == 0:
        return 1
    return value


def max_z_index(elements: Iterable[CanvasElement]) -> int:
    """Highest effective z-index, never below 1."""
    return max([1, *(effective_z_index(e.z_index) for e in elements)])


def min_z_index(elements: Iterable[CanvasElement]) -> int:
    """Lowest effective z-index, never above 1."""
    return min([1, *(effective_z_index(e.z_index) for e in elements)])


def next_front_z_index(elements: Iterable[CanvasElement]) -> int:
    """Z-index that places an element above everything else."""
    return max_z_index(elements) + 1


def bring_to_front(
    elements: list[CanvasElement], element_id: int
) -> CanvasElement | None:
    """Raise an element above all others.

    Args:
        elements: The canvas element list.
        element_id: Id of the element to raise.

    Returns:
        The updated element, or None if no element has that id.
    """
    target = find_element(elements, element_id)
    if target is None:
        return None
    target.z_index = next_front_z_index(elements)
    logger.debug(f"Element {element_id} brought to front (z={target.z_index})")
    return target


def send_to_back(
    elements: list[CanvasElement], element_id: int
) -> CanvasElement | None:
    """Lower an element below all others. The result may be negative.

    Returns:
        The updated element, or None if no element has that id.
    """
    target = find_element(elements, element_id)
    if target is None:
        return None
    target.z_index = min_z_index(elements) - 1
    logger.debug(f"Element {element_id} sent to back (z={target.z_index})")
    return target


def delete_element(
    elements: list[CanvasElement],
    element_id: int,
    selected_id: int | None = None,
) -> tuple[list[CanvasElement], int | None]:
    """Remove an element from the collection.

    Remaining z-index values are left untouched.

    Args:
        elements: The canvas element list.
        element_id: Id of the element to remove.
        selected_id: Currently selected element id.

    Returns:
        Tuple of (remaining elements, selection). The selection is cleared
        when the deleted element was selected.
    """
    remaining = [e for e in elements if e.id != element_id]
    if len(remaining) < len(elements):
        logger.debug(f"Element {element_id} deleted")
    if selected_id == element_id:
        selected_id = None
    return remaining, selected_id


def rank_by_z_index(elements: Iterable[CanvasElement]) -> list[CanvasElement]:
    """Stable ascending sort by effective z-index."""
    return sorted(elements, key=lambda e: effective_z_index(e.z_index))


__all__ = [
    "effective_z_index",
    "max_z_index",
    "min_z_index",
    "next_front_z_index",
    "bring_to_front",
    "send_to_back",
    "delete_element",
    "rank_by_z_index",
]
