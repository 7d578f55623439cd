"""Cart and saved-for-later pool, persisted as JSON."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from parcel_optimizer.models import CartLine, Item

logger = logging.getLogger(__name__)


class CartStore(BaseModel):
    """
    Quantity-tagged selections for the current order (`cart`) and the
    deferred pool (`deferred`), both keyed by item id in insertion order.

    The packing engine never sees this object; callers flatten it with
    cart_items() / deferred_lines() and pass plain lists in.
    """

    cart: dict[str, CartLine] = Field(default_factory=dict)
    deferred: dict[str, CartLine] = Field(default_factory=dict)

    def update_quantity(self, item: Item, change: int) -> None:
        """Add `change` units (negative removes); lines at zero or below are dropped."""
        current = self.cart[item.id].quantity if item.id in self.cart else 0
        new_quantity = current + change
        if new_quantity > 0:
            self.cart[item.id] = CartLine(item=item, quantity=new_quantity)
        else:
            self.cart.pop(item.id, None)

    def move_to_deferred(self, item_id: str) -> None:
        line = self.cart.pop(item_id)
        held = self.deferred[item_id].quantity if item_id in self.deferred else 0
        self.deferred[item_id] = CartLine(item=line.item, quantity=held + line.quantity)

    def move_to_cart(self, item_id: str, quantity: Optional[int] = None) -> None:
        """Move `quantity` units (default: all) of a deferred item into the cart."""
        line = self.deferred[item_id]
        to_move = line.quantity if quantity is None else quantity
        if to_move <= 0:
            raise ValueError(f"Quantity to move must be positive, got {to_move}")
        to_move = min(to_move, line.quantity)

        left = line.quantity - to_move
        if left > 0:
            self.deferred[item_id] = CartLine(item=line.item, quantity=left)
        else:
            del self.deferred[item_id]

        in_cart = self.cart[item_id].quantity if item_id in self.cart else 0
        self.cart[item_id] = CartLine(item=line.item, quantity=in_cart + to_move)

    def cart_items(self) -> list[Item]:
        flat: list[Item] = []
        for line in self.cart.values():
            flat.extend(line.expand())
        return flat

    def deferred_lines(self) -> list[CartLine]:
        return list(self.deferred.values())

    def total_units(self) -> int:
        return sum(line.quantity for line in self.cart.values())

    def save(self, path: str | Path) -> None:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        logger.debug(f"Saved cart state to {output_path}")

    @classmethod
    def load(cls, path: str | Path) -> "CartStore":
        input_path = Path(path)
        if not input_path.exists():
            return cls()
        return cls.model_validate_json(input_path.read_text(encoding="utf-8"))
