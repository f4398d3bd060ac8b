"""Z-order manager: front/back ranking and deletion bookkeeping."""

from .lib import (
    bring_to_front,
    delete_element,
    effective_z_index,
    max_z_index,
    min_z_index,
    next_front_z_index,
    rank_by_z_index,
    send_to_back,
)

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
