"""Purchase requisition check entities."""

from enum import Enum

from pydantic import Field

from src.core.entities.common import DomainModel


class PriceAlert(str, Enum):
    OVER_BUDGET = "OVER_BUDGET"
    ABOVE_LAST_PURCHASE = "ABOVE_LAST_PURCHASE"


class RequisitionLine(DomainModel):
    """A parsed requisition line: name, quantity and quoted unit price."""

    name: str
    quantity: float = 1.0
    price: float = 0.0


class StockLocation(DomainModel):
    site_id: str
    site_name: str
    quantity: float


class RequisitionCheck(DomainModel):
    """Result of checking one requisition line against catalog and stock."""

    line: RequisitionLine
    item_id: str | None = None
    item_sku: str | None = None
    item_name: str | None = None
    standard_cost: float | None = None
    last_purchase_price: float | None = None
    total_stock: float = 0.0
    locations: list[StockLocation] = Field(default_factory=list)
    alerts: list[PriceAlert] = Field(default_factory=list)
    budget_diff_percent: float | None = None
    last_price_diff_percent: float | None = None

    @property
    def matched(self) -> bool:
        return self.item_id is not None

    @property
    def available_in_stock(self) -> bool:
        return self.total_stock > 0

    @property
    def can_cover(self) -> bool:
        return self.total_stock >= self.line.quantity
