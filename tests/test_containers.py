from __future__ import annotations

import json

import pytest

from parcel_optimizer.containers import (
    BOX_PRESETS,
    DEFAULT_CATALOG,
    ContainerCatalog,
    get_box_type,
    load_catalog,
)
from parcel_optimizer.models import ContainerType, Item


def make_box(name, volume, side=10.0) -> ContainerType:
    return ContainerType(
        name=name, length=side, width=side, height=side,
        volume=volume, max_weight=10, base_co2=0.1, per_kg_co2=0.01,
    )


def test_default_catalog_has_four_boxes_smallest_first() -> None:
    """Declared order is already ascending by volume."""
    names = [b.name for b in DEFAULT_CATALOG.ascending]

    assert len(DEFAULT_CATALOG) == 4
    assert names == list(BOX_PRESETS.keys())
    assert [b.name for b in DEFAULT_CATALOG.descending] == list(reversed(names))


def test_orderings_are_computed_from_volume_and_stable() -> None:
    """Equal volumes keep declared order in both views' sort passes."""
    catalog = ContainerCatalog([
        make_box("big", 900),
        make_box("tie-a", 500),
        make_box("tiny", 100),
        make_box("tie-b", 500),
    ])

    assert [b.name for b in catalog.box_types] == ["big", "tie-a", "tiny", "tie-b"]
    assert [b.name for b in catalog.ascending] == ["tiny", "tie-a", "tie-b", "big"]
    assert [b.name for b in catalog.descending] == ["big", "tie-a", "tie-b", "tiny"]


def test_smallest_fitting_respects_axes_and_weight() -> None:
    """Keyboard (45cm long) needs at least the Large box; 30kg fits nothing."""
    keyboard = Item(id="keyboard", name="Keyboard", length=45, width=15, height=4, weight=1.0)
    anvil = Item(id="anvil", name="Anvil", length=20, width=20, height=10, weight=30)
    book = Item(id="book", name="Book", length=25, width=18, height=4, weight=0.8)

    assert DEFAULT_CATALOG.smallest_fitting(keyboard).name == "Large Box (L4)"
    assert DEFAULT_CATALOG.smallest_fitting(book).name == "Small Box (S3)"
    assert DEFAULT_CATALOG.smallest_fitting(anvil) is None


def test_get_box_type_by_full_or_short_name() -> None:
    assert get_box_type("Medium Box (M3)").volume == 13125
    assert get_box_type("medium box").volume == 13125
    assert get_box_type("X-Large Box").short_name == "X-Large Box"


def test_get_box_type_unknown_raises() -> None:
    with pytest.raises(ValueError, match="Unknown box type"):
        get_box_type("Pallet")


def test_load_catalog_from_json(tmp_path) -> None:
    """Custom catalogs load from a JSON list and get their own orderings."""
    path = tmp_path / "boxes.json"
    path.write_text(json.dumps([
        {"name": "Tube (T1)", "length": 80, "width": 10, "height": 10, "volume": 8000,
         "max_weight": 3, "base_co2": 0.12, "per_kg_co2": 0.05},
        {"name": "Envelope (E1)", "length": 30, "width": 22, "height": 2, "volume": 1320,
         "max_weight": 1, "base_co2": 0.05, "per_kg_co2": 0.02},
    ]))

    catalog = load_catalog(path)

    assert [b.short_name for b in catalog.ascending] == ["Envelope", "Tube"]


def test_load_catalog_rejects_empty_list(tmp_path) -> None:
    path = tmp_path / "boxes.json"
    path.write_text("[]")

    with pytest.raises(ValueError):
        load_catalog(path)
