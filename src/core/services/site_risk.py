"""Site risk ranking: sites holding stock that barely rotates."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime

from src.core.entities.common import as_utc, utc_now
from src.core.entities.inventory import InventoryDetail, Transaction
from src.core.entities.kpi import SiteRisk
from src.core.services.catalog import ReferenceCatalog
from src.core.services.kpi_calculator import safe_ratio, windowed_consumption


def rank_site_risk(
    details: Iterable[InventoryDetail],
    transactions: Iterable[Transaction],
    catalog: ReferenceCatalog,
    now: datetime | None = None,
    window_days: int = 30,
    limit: int = 5,
) -> list[SiteRisk]:
    """
    Rank catalog sites by inventory turnover, lowest first.

    Sites without inventory value are skipped. Ties keep catalog order.
    """
    now = as_utc(now) if now else utc_now()

    inventory: dict[str, float] = defaultdict(float)
    for d in details:
        inventory[d.site_id] += d.total_value

    consumption: dict[str, float] = defaultdict(float)
    for tx, value in windowed_consumption(transactions, catalog, now, window_days):
        consumption[tx.site_id] += value

    risks: list[SiteRisk] = []
    for site in catalog.sites.values():
        value = inventory.get(site.id, 0.0)
        if value <= 0:
            continue
        consumed = consumption.get(site.id, 0.0)
        risks.append(
            SiteRisk(
                site_id=site.id,
                name=site.name,
                type=site.type,
                inventory_value=value,
                consumption_value=consumed,
                itr=safe_ratio(consumed, value),
            )
        )

    risks.sort(key=lambda r: r.itr)
    return risks[:limit]
