"""Aggregated KPI results."""

from pydantic import Field

from src.core.entities.common import DomainModel, UTCDateTime
from src.core.entities.item import ItemCategory
from src.core.entities.site import SiteType


class KPIReport(DomainModel):
    """
    Inventory KPIs over a consumption window.

    Rates (dead_stock_rate, itr, sell_through_rate, stockout_rate,
    service_level) are fractions, not percentages. dsi is in days.
    """

    generated_at: UTCDateTime
    window_days: int
    total_stock_value: float = 0.0
    dead_stock_value: float = 0.0
    dead_stock_rate: float = 0.0
    consumption_value: float = 0.0
    itr: float = 0.0
    dsi: float = 0.0
    sell_through_rate: float = 0.0
    stockout_rate: float = 0.0
    service_level: float = 0.0
    health_score: float = 0.0
    record_count: int = 0


class CategorySupply(DomainModel):
    """Weeks of supply for one material category."""

    category: ItemCategory
    stock_value: float
    consumption_value: float
    weekly_consumption: float
    weeks_of_supply: float


class SiteRisk(DomainModel):
    """A site ranked by low inventory rotation."""

    site_id: str
    name: str
    type: SiteType
    inventory_value: float
    consumption_value: float
    itr: float


class TopValueItem(DomainModel):
    """Row of the high-value (ABC) table."""

    record_id: str
    item_id: str
    item_name: str
    item_sku: str
    site_name: str
    quantity: float
    total_value: float
    share: float = Field(default=0.0, ge=0, le=1)


class SiteInvestment(DomainModel):
    """Inventory value held at one site."""

    site_id: str
    site_name: str
    inventory_value: float
    record_count: int
    budget: float = 0.0
