from __future__ import annotations

import logging
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from parcel_optimizer.config import Settings, get_catalog, get_settings
from parcel_optimizer.containers import ContainerCatalog
from parcel_optimizer.metrics import compute_metrics
from parcel_optimizer.models import CartLine, Item, Metrics, PackingResult, Suggestion
from parcel_optimizer.packing.best_fit import pack_items
from parcel_optimizer.store import CartStore
from parcel_optimizer.suggestions import suggest_folds

logger = logging.getLogger(__name__)


class Plan(BaseModel):
    """Everything a presentation layer needs for one cart snapshot."""

    result: PackingResult
    metrics: Metrics
    suggestions: list[Suggestion] = Field(default_factory=list)


def build_plan(
    cart_items: Sequence[Item],
    deferred_lines: Sequence[CartLine] = (),
    catalog: Optional[ContainerCatalog] = None,
    settings: Optional[Settings] = None,
) -> Plan:
    """
    Pack the cart, compute its metrics and the fold suggestions for the
    deferred pool. Recomputed from scratch on every call.
    """
    settings = settings or get_settings()
    if catalog is None:
        catalog = get_catalog(settings)

    result = pack_items(cart_items, catalog)
    metrics = compute_metrics(result, cart_items, catalog)
    suggestions = suggest_folds(
        cart_items,
        deferred_lines,
        catalog,
        min_carbon_saving=settings.min_carbon_saving,
        min_efficiency_gain=settings.min_efficiency_gain,
    )

    logger.info(
        f"boxes={metrics.container_count}, "
        f"efficiency={metrics.packaging_efficiency:.1f}%, "
        f"unpacked={len(result.unpacked)}, "
        f"suggestions={len(suggestions)}"
    )
    return Plan(result=result, metrics=metrics, suggestions=suggestions)


def plan_for_store(
    store: CartStore,
    catalog: Optional[ContainerCatalog] = None,
    settings: Optional[Settings] = None,
) -> Plan:
    return build_plan(store.cart_items(), store.deferred_lines(), catalog=catalog, settings=settings)


def format_summary(plan: Plan) -> str:
    """Human-readable summary, one metric per line."""
    metrics = plan.metrics
    lines = [
        "🌱 Packing Complete",
        f"📦 Boxes: {metrics.container_count}" + (f" ({metrics.breakdown})" if metrics.breakdown else ""),
        f"📐 Packaging Efficiency: {metrics.packaging_efficiency:.1f}%",
        f"🏭 Carbon Impact: {metrics.carbon_impact:.2f} kg CO2",
        f"♻️ Carbon Saved by Consolidation: {metrics.carbon_saved:.2f} kg CO2",
    ]
    if plan.result.unpacked:
        names = ", ".join(item.name for item in plan.result.unpacked)
        lines.append(f"⚠️ Could not pack: {names}")
    for suggestion in plan.suggestions:
        if suggestion.kind == "foldable":
            lines.append(
                f"💡 Add {suggestion.quantity}x {suggestion.item.name} from saved items: "
                f"saves {suggestion.carbon_saved:.2f} kg CO2, "
                f"efficiency +{suggestion.efficiency_improvement:.1f}%"
            )
        else:
            lines.append(f"🚫 {suggestion.item.name}: {suggestion.reason}")
    return "\n".join(lines)
