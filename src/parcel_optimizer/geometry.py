"""Fit checks shared by packing, folding and smallest-box lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ContainerType, Item


def dims_fit(item: "Item", box_type: "ContainerType") -> bool:
    """
    Per-axis dimension test.

    Items are never rotated: each axis of the item is compared against the
    same axis of the box, so a 45cm keyboard does not fit a 35cm-long box
    even if it would fit diagonally or on its side.
    """
    return (
        item.length <= box_type.length
        and item.width <= box_type.width
        and item.height <= box_type.height
    )


def can_fit(
    item: "Item",
    box_type: "ContainerType",
    filled_volume: float,
    total_weight: float,
) -> bool:
    """
    Check if an item can be added to a box of `box_type`:
    - every axis fits (no rotation)
    - remaining volume is enough
    - remaining payload is enough

    Takes the current fill state as plain numbers so hypothetical
    placements can be checked without building a container.
    """
    return (
        dims_fit(item, box_type)
        and filled_volume + item.volume <= box_type.volume
        and total_weight + item.weight <= box_type.max_weight
    )


def can_fit_empty(item: "Item", box_type: "ContainerType") -> bool:
    return can_fit(item, box_type, 0.0, 0.0)
