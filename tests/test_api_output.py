"""Tests for API output formatting and input validation."""

from __future__ import annotations

from fastapi.testclient import TestClient

from parcel_optimizer import api
from parcel_optimizer.api import app
from parcel_optimizer.config import Settings
from parcel_optimizer.products import get_product
from parcel_optimizer.store import CartStore

client = TestClient(app)


def test_success_response_has_guaranteed_fields() -> None:
    """Test that success responses always have guaranteed fields."""
    request = {
        "items": [{"product_id": "book"}, {"product_id": "mug"}],
        "deferred": [{"product_id": "mug", "qty": 5}, {"product_id": "keyboard"}],
    }

    response = client.post("/optimize", json=request)

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"metrics", "summary", "plan"}

    metrics = data["metrics"]
    assert metrics["packaging_efficiency"] == 48.0
    assert metrics["carbon_impact"] == 0.222
    assert metrics["carbon_saved"] == 0.15
    assert metrics["container_count"] == 1
    assert metrics["breakdown"] == "1x Small Box"
    assert metrics["units_packed"] == 2
    assert metrics["units_unpacked"] == 0

    kinds = [s["kind"] for s in data["plan"]["suggestions"]]
    assert kinds == ["foldable", "rejected"]
    assert isinstance(data["summary"], str) and data["summary"]


def test_explicit_item_and_unpacked_count() -> None:
    """Items spelled out with dimensions work; oversize ones are counted, not dropped."""
    request = {
        "items": [
            {"id": "anvil", "name": "Anvil", "l": 20, "w": 20, "h": 10, "weight": 30},
            {"product_id": "book", "qty": 2},
        ]
    }

    response = client.post("/optimize", json=request)

    assert response.status_code == 200
    metrics = response.json()["metrics"]
    assert metrics["units_packed"] == 2
    assert metrics["units_unpacked"] == 1
    assert "Could not pack: Anvil" in response.json()["summary"]


def test_unknown_product_returns_friendly_error() -> None:
    response = client.post("/optimize", json={"items": [{"product_id": "sofa"}]})

    assert response.status_code == 422
    data = response.json()
    assert data["error"] == "UNKNOWN_PRODUCT"
    assert "summary" in data
    assert "sofa" in data["details"][0]


def test_incomplete_line_is_rejected() -> None:
    response = client.post("/optimize", json={"items": [{"id": "lamp", "l": 30}]})

    assert response.status_code == 422


def test_empty_order() -> None:
    response = client.post("/optimize", json={})

    assert response.status_code == 200
    assert response.json()["metrics"]["container_count"] == 0


def test_cart_plan_reads_persisted_store(tmp_path, monkeypatch) -> None:
    store_path = tmp_path / "cart.json"
    store = CartStore()
    store.update_quantity(get_product("laptop"), 2)
    store.update_quantity(get_product("keyboard"), 1)
    store.save(store_path)
    monkeypatch.setattr(api, "settings", Settings(store_path=store_path))

    response = client.get("/cart/plan")

    assert response.status_code == 200
    assert response.json()["metrics"]["breakdown"] == "1x Large Box"


def test_catalog_and_products() -> None:
    catalog = client.get("/catalog").json()
    assert [b["short_name"] for b in catalog] == ["Small Box", "Medium Box", "Large Box", "X-Large Box"]

    products = client.get("/products", params={"search": "fire"}).json()
    assert [p["id"] for p in products] == ["fire_tv_stick", "fire_tablet"]


def test_health() -> None:
    assert client.get("/health").json() == {"ok": True}


def test_repeated_deferred_product_lines_are_merged() -> None:
    request = {
        "items": [{"product_id": "book"}, {"product_id": "mug"}],
        "deferred": [{"product_id": "mug", "qty": 2}, {"product_id": "mug", "qty": 2}],
    }

    response = client.post("/optimize", json=request)

    assert response.status_code == 200
    suggestions = response.json()["plan"]["suggestions"]
    assert [(s["kind"], s["item"]["id"], s["quantity"]) for s in suggestions] == [("foldable", "mug", 2)]


def test_explicit_item_cannot_reuse_product_id() -> None:
    """An explicit line named like a storefront product would be confused with it."""
    request = {"items": [{"id": "book", "l": 60, "w": 40, "h": 30, "weight": 2}]}

    response = client.post("/optimize", json=request)

    assert response.status_code == 422
