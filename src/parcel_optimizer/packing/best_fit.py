# src/parcel_optimizer/packing/best_fit.py

from __future__ import annotations

import logging
from typing import Optional, Sequence

from parcel_optimizer.containers import ContainerCatalog
from parcel_optimizer.geometry import can_fit
from parcel_optimizer.models import ContainerType, Item, PackedContainer, PackingResult

logger = logging.getLogger(__name__)


def sort_by_volume(items: Sequence[Item]) -> list[Item]:
    """Largest first. sorted() is stable, so equal volumes keep input order."""
    return sorted(items, key=lambda item: item.volume, reverse=True)


def fits_in(item: Item, container: PackedContainer) -> bool:
    return can_fit(item, container.box_type, container.filled_volume, container.total_weight)


def choose_best_container(item: Item, containers: Sequence[PackedContainer]) -> Optional[int]:
    """
    Index of the open container that `item` fits into with the highest
    resulting fill percentage, or None if it fits nowhere.
    Ties go to the earliest container.
    """
    best_index: Optional[int] = None
    best_fill = -1.0
    for i, container in enumerate(containers):
        if not fits_in(item, container):
            continue
        potential_fill = container.fill_percentage_with(item)
        if potential_fill > best_fill:
            best_fill = potential_fill
            best_index = i
    return best_index


def pack_single_box(sorted_items: Sequence[Item], catalog: ContainerCatalog) -> Optional[PackedContainer]:
    """
    Phase 1: smallest box type that holds every item at once.

    Walks the box types smallest first; for each one the items are checked in
    order against a running volume / weight and the first failure rules that
    type out.
    """
    for box_type in catalog.ascending:
        filled_volume = 0.0
        total_weight = 0.0
        all_fit = True
        for item in sorted_items:
            if not can_fit(item, box_type, filled_volume, total_weight):
                all_fit = False
                break
            filled_volume += item.volume
            total_weight += item.weight

        if all_fit:
            return PackedContainer(box_type=box_type, items=list(sorted_items))
    return None


def backfill(container: PackedContainer, pending: list[Item]) -> list[Item]:
    """Put every pending item that still fits into `container`; return the rest in order."""
    remaining: list[Item] = []
    for other in pending:
        if fits_in(other, container):
            container.add(other)
        else:
            remaining.append(other)
    return remaining


def pack_items(items: Sequence[Item], catalog: ContainerCatalog) -> PackingResult:
    """
    Pack a flat list of items (one entry per unit) into boxes from `catalog`.

    Phase 1 returns the smallest single box that holds everything. Otherwise
    Phase 2 runs a greedy best-fit over the items, largest first:
    - place the item into the open box it fills best, else open the smallest
      box type that can hold it
    - after each placement, immediately backfill that box with any other
      pending items that fit
    - items no box type can hold are reported in `unpacked`

    Deterministic: same input order and catalog give the same result.
    """
    if not items:
        return PackingResult()

    sorted_items = sort_by_volume(items)

    single = pack_single_box(sorted_items, catalog)
    if single is not None:
        logger.debug(f"Single {single.box_type.name} holds all {len(sorted_items)} items")
        return PackingResult(containers=[single])

    containers: list[PackedContainer] = []
    unpacked: list[Item] = []
    pending = list(sorted_items)

    while pending:
        current = pending.pop(0)

        best_index = choose_best_container(current, containers)
        if best_index is not None:
            target = containers[best_index]
            target.add(current)
            pending = backfill(target, pending)
            continue

        new_type: Optional[ContainerType] = catalog.smallest_fitting(current)
        if new_type is None:
            logger.warning(f"Item '{current.name}' ({current.id}) cannot be packed into any available box")
            unpacked.append(current)
            continue

        new_box = PackedContainer(box_type=new_type, items=[current])
        pending = backfill(new_box, pending)
        containers.append(new_box)

    logger.debug(f"Multi-box packing: {len(containers)} boxes, {len(unpacked)} unpacked")
    return PackingResult(containers=containers, unpacked=unpacked)
