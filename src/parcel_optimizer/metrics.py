from __future__ import annotations

from collections import Counter
from typing import Sequence

from parcel_optimizer.containers import ContainerCatalog
from parcel_optimizer.models import Item, Metrics, PackedContainer, PackingResult


def container_carbon(container: PackedContainer) -> float:
    box_type = container.box_type
    return box_type.base_co2 + container.total_weight * box_type.per_kg_co2


def packaging_efficiency(containers: Sequence[PackedContainer]) -> float:
    used_volume = sum(c.filled_volume for c in containers)
    boxes_volume = sum(c.box_type.volume for c in containers)
    return 0.0 if boxes_volume == 0 else used_volume / boxes_volume * 100.0


def individual_shipment_carbon(items: Sequence[Item], catalog: ContainerCatalog) -> float:
    """
    kg CO2 if every item went out alone in its smallest fitting box.
    Items no box can hold are not shipped, so they add nothing.
    """
    total = 0.0
    for item in items:
        box_type = catalog.smallest_fitting(item)
        if box_type is not None:
            total += box_type.base_co2 + item.weight * box_type.per_kg_co2
    return total


def container_breakdown(containers: Sequence[PackedContainer]) -> str:
    counts = Counter(c.box_type.name for c in containers)
    short_names = {c.box_type.name: c.box_type.short_name for c in containers}
    return ", ".join(f"{count}x {short_names[name]}" for name, count in counts.items())


def compute_metrics(result: PackingResult, items: Sequence[Item], catalog: ContainerCatalog) -> Metrics:
    carbon_impact = sum(container_carbon(c) for c in result.containers)
    baseline = individual_shipment_carbon(items, catalog)
    return Metrics(
        packaging_efficiency=packaging_efficiency(result.containers),
        carbon_impact=carbon_impact,
        baseline_carbon=baseline,
        carbon_saved=baseline - carbon_impact,
        container_count=result.container_count,
        breakdown=container_breakdown(result.containers),
    )
