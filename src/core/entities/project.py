"""Project material balance entities."""

from pydantic import Field

from src.core.entities.common import DomainModel


class MaterialBalance(DomainModel):
    """Entries vs. stock vs. installed quantity for one item at a project."""

    item_id: str
    item_name: str
    item_sku: str
    unit: str
    cost: float
    total_entries: float
    current_stock: float
    installed: float
    wastage_percent: float

    @property
    def accounted(self) -> float:
        return self.current_stock + self.installed


class ProjectStatus(DomainModel):
    """Material balance and financial summary for a project site."""

    site_id: str
    site_name: str
    budget: float = 0.0
    materials: list[MaterialBalance] = Field(default_factory=list)
    stock_value: float = 0.0
    installed_value: float = 0.0
    average_wastage: float = 0.0
    high_wastage_count: int = 0
