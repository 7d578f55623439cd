from __future__ import annotations

import pytest

from parcel_optimizer.containers import DEFAULT_CATALOG, get_box_type
from parcel_optimizer.metrics import compute_metrics, container_breakdown, individual_shipment_carbon
from parcel_optimizer.models import Item, PackedContainer, PackingResult
from parcel_optimizer.packing.best_fit import pack_items

BOOK = Item(id="book", name="Book", length=25, width=18, height=4, weight=0.8)
MUG = Item(id="mug", name="Coffee Mug", length=12, width=9, height=10, weight=0.4)
ANVIL = Item(id="anvil", name="Anvil", length=20, width=20, height=10, weight=30)


def test_empty_result_reports_zeroes() -> None:
    metrics = compute_metrics(PackingResult(), [], DEFAULT_CATALOG)

    assert metrics.packaging_efficiency == 0.0
    assert metrics.carbon_impact == 0.0
    assert metrics.carbon_saved == 0.0
    assert metrics.container_count == 0
    assert metrics.breakdown == ""


def test_book_and_mug_metrics() -> None:
    """
    One Small box: 2880/6000 = 48%.
    Impact: 0.15 + 1.2 * 0.06 = 0.222.
    Alone: book 0.15 + 0.048, mug 0.15 + 0.024 -> 0.372, so 0.15 saved.
    """
    items = [BOOK, MUG]
    metrics = compute_metrics(pack_items(items, DEFAULT_CATALOG), items, DEFAULT_CATALOG)

    assert metrics.packaging_efficiency == pytest.approx(48.0)
    assert metrics.carbon_impact == pytest.approx(0.222)
    assert metrics.baseline_carbon == pytest.approx(0.372)
    assert metrics.carbon_saved == pytest.approx(0.15)
    assert metrics.container_count == 1
    assert metrics.breakdown == "1x Small Box"


def test_carbon_saved_can_be_negative() -> None:
    """A lone book in an X-Large box is worse than its own Small box; no clamping."""
    xl = get_box_type("X-Large Box")
    result = PackingResult(containers=[PackedContainer(box_type=xl, items=[BOOK])])

    metrics = compute_metrics(result, [BOOK], DEFAULT_CATALOG)

    assert metrics.carbon_impact == pytest.approx(0.30 + 0.8 * 0.045)
    assert metrics.baseline_carbon == pytest.approx(0.15 + 0.8 * 0.06)
    assert metrics.carbon_saved < 0
    assert metrics.carbon_saved == pytest.approx(metrics.baseline_carbon - metrics.carbon_impact)


def test_unpackable_items_excluded_from_baseline() -> None:
    assert individual_shipment_carbon([ANVIL], DEFAULT_CATALOG) == 0.0
    assert individual_shipment_carbon([ANVIL, BOOK], DEFAULT_CATALOG) == pytest.approx(0.198)


def test_breakdown_groups_by_type_in_first_seen_order() -> None:
    small = get_box_type("Small Box")
    large = get_box_type("Large Box")
    containers = [
        PackedContainer(box_type=small, items=[BOOK]),
        PackedContainer(box_type=large, items=[BOOK]),
        PackedContainer(box_type=small, items=[MUG]),
    ]

    assert container_breakdown(containers) == "2x Small Box, 1x Large Box"


def test_efficiency_is_a_percentage() -> None:
    items = [BOOK] * 9 + [MUG] * 7
    metrics = compute_metrics(pack_items(items, DEFAULT_CATALOG), items, DEFAULT_CATALOG)

    assert 0.0 <= metrics.packaging_efficiency <= 100.0


def test_container_count_matches_result() -> None:
    items = [BOOK] * 9 + [MUG] * 7
    result = pack_items(items, DEFAULT_CATALOG)

    metrics = compute_metrics(result, items, DEFAULT_CATALOG)

    assert metrics.container_count == result.container_count == len(result.containers)
