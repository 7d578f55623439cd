"""Suggestions for folding saved-for-later items into the current order's boxes."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from parcel_optimizer.containers import ContainerCatalog
from parcel_optimizer.metrics import compute_metrics
from parcel_optimizer.models import (
    CartLine,
    FoldableSuggestion,
    Item,
    PackingResult,
    RejectedSuggestion,
    Suggestion,
)
from parcel_optimizer.packing.best_fit import pack_items
from parcel_optimizer.packing.consolidation import fold_into_existing

logger = logging.getLogger(__name__)

MIN_CARBON_SAVING = 0.01  # kg CO2
MIN_EFFICIENCY_GAIN = 0.1  # percentage points

REJECTED_REASON = (
    "Too large or heavy to fit in with the current order without requiring "
    "additional boxes or a larger box type."
)


def merge_lines(lines: Iterable[CartLine]) -> list[CartLine]:
    """One line per distinct item, quantities summed, in first-seen order."""
    merged: dict[Item, CartLine] = {}
    for line in lines:
        held = merged[line.item].quantity if line.item in merged else 0
        merged[line.item] = CartLine(item=line.item, quantity=held + line.quantity)
    return list(merged.values())


def suggest_folds(
    cart_items: Sequence[Item],
    deferred: Iterable[CartLine],
    catalog: ContainerCatalog,
    min_carbon_saving: float = MIN_CARBON_SAVING,
    min_efficiency_gain: float = MIN_EFFICIENCY_GAIN,
) -> list[Suggestion]:
    """
    Evaluate each deferred item type against the current order.

    Lines holding the same item are merged first. Each item type is then
    checked on its own against the original packing (types do not see each
    other's folded units):
    - no unit fits the existing boxes -> RejectedSuggestion
    - some units fit -> compare shipping them inside the current boxes with
      shipping the order and those units separately; emit a
      FoldableSuggestion when the carbon saved or the efficiency gain clears
      its threshold

    Args:
        cart_items: Flat list of the current order, one entry per unit
        deferred: Saved-for-later lines, in display order
        catalog: Box types to pack with

    Returns:
        Suggestions in first-seen order of the deferred items
    """
    deferred = merge_lines(deferred)
    if not deferred:
        return []

    baseline_result = pack_items(cart_items, catalog)
    baseline = compute_metrics(baseline_result, cart_items, catalog)

    suggestions: list[Suggestion] = []
    for line in deferred:
        outcome = fold_into_existing(line.item, line.quantity, baseline_result)

        if not outcome.success:
            suggestions.append(RejectedSuggestion(item=line.item, reason=REJECTED_REASON))
            continue

        folded_units = [line.item] * outcome.quantity_added
        combined = compute_metrics(
            PackingResult(containers=outcome.containers),
            list(cart_items) + folded_units,
            catalog,
        )

        alone = compute_metrics(pack_items(folded_units, catalog), folded_units, catalog)
        carbon_if_separate = baseline.carbon_impact + alone.carbon_impact
        carbon_saved = carbon_if_separate - combined.carbon_impact
        efficiency_improvement = combined.packaging_efficiency - baseline.packaging_efficiency

        logger.debug(
            f"fold {line.item.id} x{outcome.quantity_added}: "
            f"carbon_saved={carbon_saved:.3f}, efficiency_improvement={efficiency_improvement:.2f}"
        )

        if carbon_saved > min_carbon_saving or efficiency_improvement > min_efficiency_gain:
            suggestions.append(FoldableSuggestion(
                item=line.item,
                quantity=outcome.quantity_added,
                efficiency_improvement=efficiency_improvement,
                carbon_saved=carbon_saved,
                container_count_before=baseline.container_count,
                container_count_after=baseline.container_count,
            ))

    return suggestions
