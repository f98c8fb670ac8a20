"""Project material balance: what was delivered, what remains, what was installed."""

from collections import defaultdict
from collections.abc import Iterable

from src.core.entities.inventory import (
    InventoryRecord,
    ProjectProgress,
    Transaction,
    TransactionType,
)
from src.core.entities.project import MaterialBalance, ProjectStatus
from src.core.services.catalog import ReferenceCatalog

# Wastage above this percentage is flagged on the project report
HIGH_WASTAGE_PERCENT = 8.0


def wastage_percent(entries: float, stock: float, installed: float) -> float:
    """Share of delivered material neither in stock nor installed. Never negative."""
    if entries <= 0:
        return 0.0
    return max(0.0, (entries - (stock + installed)) / entries * 100)


def project_status(
    site_id: str,
    inventory: Iterable[InventoryRecord],
    transactions: Iterable[Transaction],
    progress: Iterable[ProjectProgress],
    catalog: ReferenceCatalog,
) -> ProjectStatus:
    """
    Build the material balance of a project site.

    Raises:
        SiteNotFoundError: If the site is not in the catalog.
    """
    site = catalog.require_site(site_id)

    stock: dict[str, float] = defaultdict(float)
    for record in inventory:
        if record.site_id == site_id:
            stock[record.item_id] += record.quantity

    installed: dict[str, float] = defaultdict(float)
    for report in progress:
        if report.site_id == site_id:
            installed[report.item_id] += report.quantity_installed

    entries: dict[str, float] = defaultdict(float)
    for tx in transactions:
        if tx.site_id == site_id and tx.type == TransactionType.ENTRY:
            entries[tx.item_id] += tx.quantity

    materials: list[MaterialBalance] = []
    for item in catalog.items.values():
        delivered = entries.get(item.id, 0.0)
        on_hand = stock.get(item.id, 0.0)
        used = installed.get(item.id, 0.0)
        if delivered <= 0 and on_hand <= 0 and used <= 0:
            continue
        materials.append(
            MaterialBalance(
                item_id=item.id,
                item_name=item.name,
                item_sku=item.sku,
                unit=item.unit,
                cost=item.cost,
                total_entries=delivered,
                current_stock=on_hand,
                installed=used,
                wastage_percent=wastage_percent(delivered, on_hand, used),
            )
        )

    average = (
        sum(m.wastage_percent for m in materials) / len(materials) if materials else 0.0
    )
    return ProjectStatus(
        site_id=site.id,
        site_name=site.name,
        budget=site.budget,
        materials=materials,
        stock_value=sum(m.current_stock * m.cost for m in materials),
        installed_value=sum(m.installed * m.cost for m in materials),
        average_wastage=average,
        high_wastage_count=sum(1 for m in materials if m.wastage_percent > HIGH_WASTAGE_PERCENT),
    )
