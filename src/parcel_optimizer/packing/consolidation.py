from __future__ import annotations

from dataclasses import dataclass, field

from parcel_optimizer.models import Item, PackedContainer, PackingResult
from parcel_optimizer.packing.best_fit import choose_best_container


@dataclass
class FoldOutcome:
    quantity_added: int
    containers: list[PackedContainer] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.quantity_added > 0


def fold_into_existing(item: Item, quantity: int, result: PackingResult) -> FoldOutcome:
    """
    Try to add `quantity` units of `item` to the boxes already in `result`.

    Works on copies of the containers; `result` is left untouched. Each unit
    goes to the box it fills best. Stops at the first unit that fits nowhere,
    and never opens a new box.

    Returns:
        FoldOutcome with the number of units placed and the simulated boxes
    """
    simulated = [container.copy_container() for container in result.containers]

    added = 0
    for _ in range(quantity):
        best_index = choose_best_container(item, simulated)
        if best_index is None:
            break
        simulated[best_index].add(item)
        added += 1

    return FoldOutcome(quantity_added=added, containers=simulated)
