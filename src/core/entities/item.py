"""Catalog item entity."""

from enum import Enum

from pydantic import Field

from src.core.entities.common import DomainModel

_LEGACY_CATEGORIES = {
    "PROTECCION": "PROTECTION",
    "TUBERIA": "PIPING",
    "ILUMINACION": "LIGHTING",
    "HERRAMIENTA": "TOOLING",
    "ACCESORIOS": "ACCESSORIES",
}


class ItemCategory(str, Enum):
    """Material category."""

    CABLES = "CABLES"
    PROTECTION = "PROTECTION"
    PIPING = "PIPING"
    LIGHTING = "LIGHTING"
    TOOLING = "TOOLING"
    ACCESSORIES = "ACCESSORIES"

    @classmethod
    def _missing_(cls, value: object) -> "ItemCategory | None":
        if isinstance(value, str) and value in _LEGACY_CATEGORIES:
            return cls(_LEGACY_CATEGORIES[value])
        return None


class PricePoint(DomainModel):
    """Historical purchase price for a month (YYYY-MM)."""

    date: str
    price: float = Field(ge=0)


class Item(DomainModel):
    """A catalog material with its standard unit cost."""

    id: str
    sku: str
    name: str
    category: ItemCategory = ItemCategory.ACCESSORIES
    unit: str = "und"
    cost: float = Field(default=0.0, ge=0)
    image_url: str | None = None
    # Newest first
    price_history: list[PricePoint] = Field(default_factory=list)

    @property
    def last_purchase_price(self) -> float | None:
        if not self.price_history:
            return None
        return self.price_history[0].price
