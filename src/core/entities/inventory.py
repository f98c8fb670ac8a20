"""Inventory domain entities."""

from enum import Enum

from pydantic import Field

from src.core.entities.common import DomainModel, UTCDateTime
from src.core.entities.item import ItemCategory, PricePoint
from src.core.entities.site import SiteType


class TransactionType(str, Enum):
    """Kinds of ledger entries."""

    ENTRY = "ENTRY"
    CONSUMPTION = "CONSUMPTION"
    TRANSFER_IN = "TRANSFER_IN"
    TRANSFER_OUT = "TRANSFER_OUT"


class InventoryRecord(DomainModel):
    """Stock on hand of one item at one site."""

    id: str
    item_id: str
    site_id: str
    quantity: float = Field(default=0.0, ge=0)
    last_moved_date: UTCDateTime


class Transaction(DomainModel):
    """
    Immutable ledger entry.

    Quantity is signed: positive for entries and incoming transfers,
    negative for consumption and outgoing transfers.
    """

    id: str
    item_id: str
    site_id: str
    quantity: float
    date: UTCDateTime
    type: TransactionType


class ProjectProgress(DomainModel):
    """Cumulative quantity reported installed at a project site."""

    id: str
    site_id: str
    item_id: str
    quantity_installed: float = Field(default=0.0, ge=0)
    last_report_date: UTCDateTime


class InventoryDetail(InventoryRecord):
    """InventoryRecord joined against the catalog, with aging and value."""

    item_name: str
    item_sku: str
    category: ItemCategory
    unit: str
    cost: float
    price_history: list[PricePoint] = Field(default_factory=list)
    total_value: float
    site_name: str
    site_type: SiteType | None = None
    days_idle: int
    is_stagnant: bool


class InventoryStatus(str, Enum):
    """Status filter for the inventory listing."""

    ALL = "ALL"
    LOW = "LOW"
    STAGNANT = "STAGNANT"
    OK = "OK"


class Thresholds(DomainModel):
    """User-adjustable alert thresholds."""

    stagnant_days: int = Field(default=30, ge=0)
    low_stock_quantity: float = Field(default=50, ge=0)
