"""Data schemas for input/output operations."""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from parcel_optimizer.models import CartLine, Item
from parcel_optimizer.products import PRODUCT_PRESETS, get_product


class ItemLineSchema(BaseModel):
    """
    One cart line. Either references a storefront product by `product_id`
    or spells the item out with explicit dimensions (cm) and weight (kg).
    """
    product_id: Optional[str] = Field(None, description="Storefront product id, e.g. 'book'")
    id: Optional[str] = Field(None, description="Item id when no product_id is given")
    name: Optional[str] = Field(None, description="Display label")
    l: Optional[float] = Field(None, gt=0, description="Length in cm")
    w: Optional[float] = Field(None, gt=0, description="Width in cm")
    h: Optional[float] = Field(None, gt=0, description="Height in cm")
    weight: Optional[float] = Field(None, gt=0, description="Weight in kg")
    qty: int = Field(1, gt=0, description="Quantity")

    @model_validator(mode="after")
    def _needs_product_or_dims(self) -> "ItemLineSchema":
        if self.product_id is None:
            missing = [k for k in ("id", "l", "w", "h", "weight") if getattr(self, k) is None]
            if missing:
                raise ValueError(f"Item needs either product_id or explicit fields; missing {missing}")
            if self.id.strip().lower() in PRODUCT_PRESETS:
                raise ValueError(f"Explicit item id '{self.id}' is a storefront product; use product_id instead")
        return self

    def to_cart_line(self) -> CartLine:
        """Raises ValueError for an unknown product_id."""
        if self.product_id is not None:
            item = get_product(self.product_id)
        else:
            item = Item(
                id=self.id,
                name=self.name or self.id,
                length=self.l,
                width=self.w,
                height=self.h,
                weight=self.weight,
            )
        return CartLine(item=item, quantity=self.qty)


class OptimizeRequestSchema(BaseModel):
    """Schema for an optimize request."""
    items: List[ItemLineSchema] = Field(default_factory=list, description="Lines in the current order")
    deferred: List[ItemLineSchema] = Field(default_factory=list, description="Saved-for-later lines")


class BoxTypeSchema(BaseModel):
    """Schema for a box type in the catalog listing."""
    name: str
    short_name: str
    length: float
    width: float
    height: float
    volume: float
    max_weight: float
    base_co2: float
    per_kg_co2: float
