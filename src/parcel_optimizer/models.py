from __future__ import annotations

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

_CODE_SUFFIX = re.compile(r"\s\(.*\)")


class Item(BaseModel):
    """A single physical unit to ship (dimensions in cm, weight in kg)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique identifier for the item type")
    name: str = Field(description="Display label")
    length: float = Field(gt=0, description="Length of the item in cm")
    width: float = Field(gt=0, description="Width of the item in cm")
    height: float = Field(gt=0, description="Height of the item in cm")
    weight: float = Field(gt=0, description="Weight in kg")

    @computed_field
    @property
    def volume(self) -> float:
        return float(self.length) * float(self.width) * float(self.height)


class ContainerType(BaseModel):
    """Shipping box template from the catalog."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Box type name, e.g. 'Small Box (S3)'")
    length: float = Field(gt=0, description="Interior length in cm")
    width: float = Field(gt=0, description="Interior width in cm")
    height: float = Field(gt=0, description="Interior height in cm")
    # Explicit rather than derived so a catalog can discount odd interiors
    volume: float = Field(gt=0, description="Usable interior volume in cm3")
    max_weight: float = Field(gt=0, description="Maximum payload in kg")
    base_co2: float = Field(ge=0, description="Fixed kg CO2 per box shipped")
    per_kg_co2: float = Field(ge=0, description="kg CO2 per kg packed")

    @property
    def short_name(self) -> str:
        """Name without the trailing size code: 'Small Box (S3)' -> 'Small Box'."""
        return _CODE_SUFFIX.sub("", self.name)


class PackedContainer(BaseModel):
    """A box of a given type plus the items assigned to it."""

    box_type: ContainerType
    items: list[Item] = Field(default_factory=list)

    @computed_field
    @property
    def filled_volume(self) -> float:
        return sum(item.volume for item in self.items)

    @computed_field
    @property
    def total_weight(self) -> float:
        return sum(item.weight for item in self.items)

    @computed_field
    @property
    def fill_percentage(self) -> float:
        return self.filled_volume / self.box_type.volume * 100.0

    def fill_percentage_with(self, item: Item) -> float:
        """Fill percentage this box would reach after adding `item`."""
        return (self.filled_volume + item.volume) / self.box_type.volume * 100.0

    def add(self, item: Item) -> None:
        self.items.append(item)

    def copy_container(self) -> "PackedContainer":
        return PackedContainer(box_type=self.box_type, items=list(self.items))


class PackingResult(BaseModel):
    """Standard result returned by the packer."""

    containers: list[PackedContainer] = Field(default_factory=list)
    # Items no box type in the catalog can hold, even empty
    unpacked: list[Item] = Field(default_factory=list)

    @property
    def container_count(self) -> int:
        return len(self.containers)


class Metrics(BaseModel):
    """Sustainability figures derived from a packing result."""

    model_config = ConfigDict(frozen=True)

    packaging_efficiency: float = Field(description="Packed volume over box volume, in percent")
    carbon_impact: float = Field(description="Estimated kg CO2 for the packed boxes")
    baseline_carbon: float = Field(description="kg CO2 if every item shipped in its own box")
    carbon_saved: float = Field(description="baseline_carbon - carbon_impact (may be negative)")
    container_count: int = Field(ge=0)
    breakdown: str = Field(description="e.g. '1x Small Box, 2x Large Box'")


class CartLine(BaseModel):
    """Quantity-tagged selection of one item type."""

    item: Item
    quantity: int = Field(gt=0)

    def expand(self) -> list[Item]:
        return [self.item] * self.quantity


class FoldableSuggestion(BaseModel):
    kind: Literal["foldable"] = "foldable"
    item: Item
    quantity: int = Field(gt=0, description="Units that fit into the existing boxes")
    efficiency_improvement: float = Field(description="Percentage points gained")
    carbon_saved: float = Field(description="kg CO2 saved versus shipping separately")
    container_count_before: int
    container_count_after: int


class RejectedSuggestion(BaseModel):
    kind: Literal["rejected"] = "rejected"
    item: Item
    reason: str


Suggestion = Annotated[
    Union[FoldableSuggestion, RejectedSuggestion],
    Field(discriminator="kind"),
]
