# src/parcel_optimizer/products.py
from __future__ import annotations

from parcel_optimizer.models import Item

# Storefront products (cm / kg).
PRODUCT_PRESETS: dict[str, dict[str, float | str]] = {
    "book":          {"name": "Book",          "length": 25, "width": 18, "height": 4,   "weight": 0.8},
    "laptop":        {"name": "Laptop",        "length": 35, "width": 25, "height": 3,   "weight": 2.0},
    "mug":           {"name": "Coffee Mug",    "length": 12, "width": 9,  "height": 10,  "weight": 0.4},
    "tshirt":        {"name": "T-Shirt",       "length": 20, "width": 15, "height": 2,   "weight": 0.2},
    "headphones":    {"name": "Headphones",    "length": 20, "width": 18, "height": 10,  "weight": 0.3},
    "keyboard":      {"name": "Keyboard",      "length": 45, "width": 15, "height": 4,   "weight": 1.0},
    "echo_dot":      {"name": "Echo Dot",      "length": 10, "width": 10, "height": 5,   "weight": 0.3},
    "kindle":        {"name": "Kindle",        "length": 17, "width": 12, "height": 1,   "weight": 0.18},
    "fire_tv_stick": {"name": "Fire TV Stick", "length": 15, "width": 4,  "height": 1.5, "weight": 0.05},
    "fire_tablet":   {"name": "Fire Tablet",   "length": 20, "width": 14, "height": 1,   "weight": 0.3},
}


def get_product(product_id: str) -> Item:
    key = product_id.strip().lower()
    if key not in PRODUCT_PRESETS:
        raise ValueError(f"Unknown product '{product_id}'. Valid: {sorted(PRODUCT_PRESETS.keys())}")
    return Item(id=key, **PRODUCT_PRESETS[key])


def all_products() -> list[Item]:
    return [Item(id=product_id, **fields) for product_id, fields in PRODUCT_PRESETS.items()]


def search_products(term: str = "") -> list[Item]:
    """Case-insensitive substring match on product names, in catalog order."""
    needle = term.strip().lower()
    return [item for item in all_products() if needle in item.name.lower()]
