"""
Inventory and tool enrichment.

Joins raw records against the reference catalog and derives aging, value and
alert levels. Pure functions: pass ``now`` to get reproducible output.
"""

import math
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Literal

from src.core.entities.common import SECONDS_PER_DAY, as_utc, utc_now
from src.core.entities.inventory import (
    InventoryDetail,
    InventoryRecord,
    InventoryStatus,
    Thresholds,
)
from src.core.entities.item import ItemCategory
from src.core.entities.tool import (
    MaintenanceAlert,
    Tool,
    ToolDetail,
    ToolStats,
    ToolStatus,
    WarrantyAlert,
)
from src.core.services.catalog import ReferenceCatalog

# Tool alert panel: maintenance due within a week or warranty within a month
ALERT_MAINTENANCE_DAYS = 7
ALERT_WARRANTY_DAYS = 30

_RECORD_FIELDS = set(InventoryRecord.model_fields)
_TOOL_FIELDS = set(Tool.model_fields)

SortKey = Literal["item_name", "site_name", "quantity", "days_idle", "total_value"]


def days_between(later: datetime, earlier: datetime) -> int:
    """Signed whole days from ``earlier`` to ``later``, rounded up."""
    delta = as_utc(later) - as_utc(earlier)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def days_idle(last_moved: datetime, now: datetime) -> int:
    """Days since the last movement, rounded up. Never negative."""
    delta = abs((as_utc(now) - as_utc(last_moved)).total_seconds())
    return math.ceil(delta / SECONDS_PER_DAY)


def enrich_inventory(
    records: Iterable[InventoryRecord],
    catalog: ReferenceCatalog,
    now: datetime | None = None,
    stagnant_days: int = 30,
) -> list[InventoryDetail]:
    """
    Join inventory records with item and site data.

    Records pointing to unknown items or sites get placeholder names and a
    zero cost instead of failing.
    """
    now = as_utc(now) if now else utc_now()
    details: list[InventoryDetail] = []

    for record in records:
        item = catalog.item(record.item_id)
        site = catalog.site(record.site_id)
        cost = item.cost if item else 0.0
        idle = days_idle(record.last_moved_date, now)

        details.append(
            InventoryDetail(
                **record.model_dump(include=_RECORD_FIELDS),
                item_name=item.name if item else f"Item {record.item_id}",
                item_sku=item.sku if item else "N/A",
                category=item.category if item else ItemCategory.ACCESSORIES,
                unit=item.unit if item else "und",
                cost=cost,
                price_history=list(item.price_history) if item else [],
                total_value=record.quantity * cost,
                site_name=site.name if site else f"Site {record.site_id}",
                site_type=site.type if site else None,
                days_idle=idle,
                is_stagnant=idle > stagnant_days,
            )
        )

    return details


def _maintenance_alert(days: int, soon_days: int) -> MaintenanceAlert:
    if days < 0:
        return MaintenanceAlert.OVERDUE
    if days < soon_days:
        return MaintenanceAlert.SOON
    return MaintenanceAlert.OK


def _warranty_alert(days: int, expiring_days: int) -> WarrantyAlert:
    if days < 0:
        return WarrantyAlert.EXPIRED
    if days < expiring_days:
        return WarrantyAlert.EXPIRING
    return WarrantyAlert.OK


def enrich_tools(
    tools: Iterable[Tool],
    catalog: ReferenceCatalog,
    now: datetime | None = None,
    maintenance_soon_days: int = 15,
    warranty_expiring_days: int = 30,
) -> list[ToolDetail]:
    """Add site name, signed day countdowns and alert levels to each tool."""
    now = as_utc(now) if now else utc_now()
    details: list[ToolDetail] = []

    for tool in tools:
        to_maintenance = days_between(tool.next_maintenance_date, now)
        to_warranty = days_between(tool.warranty_expiration_date, now)
        details.append(
            ToolDetail(
                **tool.model_dump(include=_TOOL_FIELDS),
                site_name=catalog.site_name(tool.site_id),
                days_to_maintenance=to_maintenance,
                days_to_warranty=to_warranty,
                maintenance_alert=_maintenance_alert(to_maintenance, maintenance_soon_days),
                warranty_alert=_warranty_alert(to_warranty, warranty_expiring_days),
            )
        )

    return details


def _matches_status(
    detail: InventoryDetail, status: InventoryStatus, thresholds: Thresholds
) -> bool:
    low = detail.quantity < thresholds.low_stock_quantity
    stagnant = detail.days_idle > thresholds.stagnant_days
    if status == InventoryStatus.LOW:
        return low
    if status == InventoryStatus.STAGNANT:
        return stagnant
    if status == InventoryStatus.OK:
        return not low and not stagnant
    return True


def filter_inventory(
    details: Iterable[InventoryDetail],
    status: InventoryStatus = InventoryStatus.ALL,
    thresholds: Thresholds | None = None,
    *,
    site_id: str | None = None,
    category: ItemCategory | None = None,
    search: str | None = None,
    skus: Sequence[str] | None = None,
    sort_by: SortKey | None = None,
    descending: bool = False,
) -> list[InventoryDetail]:
    """
    Filter and sort enriched inventory for the listing view.

    Args:
        details: Enriched rows.
        status: LOW, STAGNANT, OK or ALL.
        thresholds: Stagnation and low-stock limits (defaults if None).
        site_id: Keep only this site.
        category: Keep only this category.
        search: Case-insensitive substring of item name or SKU.
        skus: Keep only these SKUs. Takes precedence over ``search``.
        sort_by: Field to sort on. Sorting is stable.
        descending: Reverse sort order.

    Returns:
        Filtered (and optionally sorted) rows.
    """
    thresholds = thresholds or Thresholds()
    needle = search.strip().lower() if search else ""
    wanted_skus = set(skus) if skus else None

    result = []
    for detail in details:
        if site_id and detail.site_id != site_id:
            continue
        if category and detail.category != category:
            continue
        if wanted_skus is not None:
            if detail.item_sku not in wanted_skus:
                continue
        elif needle and needle not in detail.item_name.lower() and needle not in detail.item_sku.lower():
            continue
        if not _matches_status(detail, status, thresholds):
            continue
        result.append(detail)

    if sort_by:
        result.sort(key=lambda d: getattr(d, sort_by), reverse=descending)
    return result


def tool_alerts(details: Iterable[ToolDetail], limit: int | None = None) -> list[ToolDetail]:
    """Tools needing attention soonest: maintenance within a week or warranty within a month."""
    alerts = [
        d
        for d in details
        if d.days_to_maintenance < ALERT_MAINTENANCE_DAYS
        or d.days_to_warranty < ALERT_WARRANTY_DAYS
    ]
    alerts.sort(key=lambda d: d.days_to_maintenance)
    return alerts[:limit] if limit is not None else alerts


def tool_stats(details: Sequence[ToolDetail]) -> ToolStats:
    """Fleet counts per status and site, with the operative share as health index."""
    if not details:
        return ToolStats()

    by_status = Counter(d.status.value for d in details)
    by_site = Counter(d.site_name for d in details)
    operative = by_status.get(ToolStatus.OPERATIVE.value, 0)

    return ToolStats(
        total=len(details),
        operative=operative,
        in_maintenance=by_status.get(ToolStatus.MAINTENANCE.value, 0)
        + by_status.get(ToolStatus.REPAIR.value, 0),
        overdue_maintenance=sum(
            1 for d in details if d.maintenance_alert == MaintenanceAlert.OVERDUE
        ),
        by_status=dict(by_status),
        by_site=dict(by_site),
        health_index=operative / len(details) * 100,
    )
