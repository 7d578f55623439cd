# src/parcel_optimizer/containers.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Optional

from parcel_optimizer.geometry import can_fit_empty
from parcel_optimizer.models import ContainerType, Item

# Standard e-commerce box sizes (cm / kg / kg CO2).
BOX_PRESETS: dict[str, dict[str, float]] = {
    "Small Box (S3)":   {"length": 25, "width": 20, "height": 12, "volume": 6000,  "max_weight": 5,  "base_co2": 0.15, "per_kg_co2": 0.06},
    "Medium Box (M3)":  {"length": 35, "width": 25, "height": 15, "volume": 13125, "max_weight": 10, "base_co2": 0.20, "per_kg_co2": 0.055},
    "Large Box (L4)":   {"length": 45, "width": 35, "height": 20, "volume": 31500, "max_weight": 15, "base_co2": 0.25, "per_kg_co2": 0.05},
    "X-Large Box (X1)": {"length": 60, "width": 40, "height": 30, "volume": 72000, "max_weight": 22, "base_co2": 0.30, "per_kg_co2": 0.045},
}


class ContainerCatalog:
    """
    Ordered set of box types.

    Keeps the declared order and computes the by-volume orderings once, so
    every component breaks ties the same way (stable sort: equal volumes keep
    declared order).
    """

    def __init__(self, box_types: Iterable[ContainerType]):
        self.box_types: tuple[ContainerType, ...] = tuple(box_types)
        self.ascending: tuple[ContainerType, ...] = tuple(
            sorted(self.box_types, key=lambda b: b.volume)
        )
        self.descending: tuple[ContainerType, ...] = tuple(
            sorted(self.box_types, key=lambda b: b.volume, reverse=True)
        )

    def __iter__(self):
        return iter(self.box_types)

    def __len__(self) -> int:
        return len(self.box_types)

    def smallest_fitting(self, item: Item) -> Optional[ContainerType]:
        """Smallest box type that can hold `item` on its own, or None."""
        for box_type in self.ascending:
            if can_fit_empty(item, box_type):
                return box_type
        return None


def _presets_to_types() -> list[ContainerType]:
    return [ContainerType(name=name, **dims) for name, dims in BOX_PRESETS.items()]


DEFAULT_CATALOG = ContainerCatalog(_presets_to_types())


def get_box_type(name: str) -> ContainerType:
    key = name.strip().lower()
    for box_type in DEFAULT_CATALOG:
        if key in (box_type.name.lower(), box_type.short_name.lower()):
            return box_type
    raise ValueError(f"Unknown box type '{name}'. Valid: {sorted(BOX_PRESETS.keys())}")


def load_catalog(path: str | Path) -> ContainerCatalog:
    """
    Load a catalog from a JSON file holding a list of box type objects
    (name, length, width, height, volume, max_weight, base_co2, per_kg_co2).
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list) or not data:
        raise ValueError(f"Catalog file {path} must contain a non-empty list of box types")
    return ContainerCatalog(ContainerType(**entry) for entry in data)
