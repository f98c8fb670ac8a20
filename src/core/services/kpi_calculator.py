"""
KPI calculator.

Aggregates enriched inventory and the transaction ledger into rotation,
dead stock, sell-through and supply coverage indicators. All ratios fall
back to 0 when their denominator is 0, so results never contain NaN or
infinity.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from src.config import get_logger
from src.core.entities.common import as_utc, utc_now
from src.core.entities.inventory import InventoryDetail, Transaction, TransactionType
from src.core.entities.item import ItemCategory
from src.core.entities.kpi import (
    CategorySupply,
    KPIReport,
    SiteInvestment,
    TopValueItem,
)
from src.core.entities.movement import MovementRequest, MovementStatus
from src.core.services.catalog import ReferenceCatalog

logger = get_logger(__name__)

# Health score weights
DEAD_STOCK_PENALTY = 1.5
STOCKOUT_PENALTY = 2.0
ROTATION_BONUS = 20.0


def safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def window_start(now: datetime, window_days: int) -> datetime:
    return as_utc(now) - timedelta(days=window_days)


def windowed_consumption(
    transactions: Iterable[Transaction],
    catalog: ReferenceCatalog,
    now: datetime,
    window_days: int,
) -> list[tuple[Transaction, float]]:
    """CONSUMPTION transactions of the last ``window_days`` up to ``now``, with their value."""
    since = window_start(now, window_days)
    now = as_utc(now)
    return [
        (tx, abs(tx.quantity) * catalog.item_cost(tx.item_id))
        for tx in transactions
        if tx.type == TransactionType.CONSUMPTION and since <= tx.date <= now
    ]


def health_score(
    dead_stock_rate: float,
    stockout_rate: float,
    itr: float,
    itr_target: float = 0.5,
) -> float:
    """
    Heuristic 0-100 inventory health score.

    Starts at 100, loses 1.5 points per percent of dead stock and 2 points per
    percent of stocked-out records, and gains up to 20 points when rotation
    beats the target (full bonus at twice the target).
    """
    score = 100.0
    score -= dead_stock_rate * 100 * DEAD_STOCK_PENALTY
    score -= stockout_rate * 100 * STOCKOUT_PENALTY
    if itr_target > 0 and itr > itr_target:
        score += ROTATION_BONUS * min(1.0, (itr - itr_target) / itr_target)
    return max(0.0, min(100.0, score))


def compute_kpis(
    details: Sequence[InventoryDetail],
    transactions: Iterable[Transaction],
    catalog: ReferenceCatalog,
    now: datetime | None = None,
    window_days: int = 30,
    dead_stock_days: int = 90,
    stockout_quantity: float = 5,
    itr_target: float = 0.5,
) -> KPIReport:
    """
    Compute the KPI report for a snapshot.

    Args:
        details: Enriched inventory rows.
        transactions: Ledger entries; only CONSUMPTION inside the window count.
        catalog: Reference catalog for item costs.
        now: Reference time (defaults to current UTC time).
        window_days: Consumption window in days.
        dead_stock_days: Idle days after which stock is dead.
        stockout_quantity: Quantity at or below which a record is stocked out.
        itr_target: Rotation target for the health score bonus.

    Returns:
        KPIReport with rates as fractions.
    """
    now = as_utc(now) if now else utc_now()

    total_value = sum(d.total_value for d in details)
    dead_value = sum(d.total_value for d in details if d.days_idle > dead_stock_days)
    consumption = sum(
        value for _, value in windowed_consumption(
            transactions, catalog, now, window_days
        )
    )

    itr = safe_ratio(consumption, total_value)
    dsi = safe_ratio(window_days, itr)
    dead_rate = safe_ratio(dead_value, total_value)
    stockouts = sum(1 for d in details if d.quantity <= stockout_quantity)
    stockout_rate = safe_ratio(stockouts, len(details))

    report = KPIReport(
        generated_at=now,
        window_days=window_days,
        total_stock_value=total_value,
        dead_stock_value=dead_value,
        dead_stock_rate=dead_rate,
        consumption_value=consumption,
        itr=itr,
        dsi=dsi,
        sell_through_rate=safe_ratio(consumption, total_value + consumption),
        stockout_rate=stockout_rate,
        service_level=1.0 - stockout_rate if details else 0.0,
        health_score=health_score(dead_rate, stockout_rate, itr, itr_target),
        record_count=len(details),
    )

    logger.debug(
        "kpis_computed",
        records=len(details),
        total_value=round(total_value, 2),
        itr=round(itr, 4),
        dsi=round(dsi, 1),
    )
    return report


def weeks_of_supply(
    details: Iterable[InventoryDetail],
    transactions: Iterable[Transaction],
    catalog: ReferenceCatalog,
    now: datetime | None = None,
    window_days: int = 30,
    cap: float = 52,
) -> list[CategorySupply]:
    """Coverage in weeks per category, sorted by stock value descending."""
    now = as_utc(now) if now else utc_now()

    stock: dict[ItemCategory, float] = defaultdict(float)
    for d in details:
        stock[d.category] += d.total_value

    consumed: dict[ItemCategory, float] = defaultdict(float)
    for tx, value in windowed_consumption(transactions, catalog, now, window_days):
        item = catalog.item(tx.item_id)
        category = item.category if item else ItemCategory.ACCESSORIES
        consumed[category] += value

    weeks_in_window = window_days / 7
    rows: list[CategorySupply] = []
    for category in set(stock) | set(consumed):
        stock_value = stock.get(category, 0.0)
        consumption = consumed.get(category, 0.0)
        weekly = consumption / weeks_in_window if weeks_in_window > 0 else 0.0

        if weekly > 0:
            weeks = min(cap, stock_value / weekly)
        else:
            weeks = cap if stock_value > 0 else 0.0

        rows.append(
            CategorySupply(
                category=category,
                stock_value=stock_value,
                consumption_value=consumption,
                weekly_consumption=weekly,
                weeks_of_supply=weeks,
            )
        )

    rows.sort(key=lambda r: (-r.stock_value, r.category.value))
    return rows


def top_value_items(details: Sequence[InventoryDetail], limit: int = 10) -> list[TopValueItem]:
    total = sum(d.total_value for d in details)
    ranked = sorted(details, key=lambda d: d.total_value, reverse=True)[:limit]
    return [
        TopValueItem(
            record_id=d.id,
            item_id=d.item_id,
            item_name=d.item_name,
            item_sku=d.item_sku,
            site_name=d.site_name,
            quantity=d.quantity,
            total_value=d.total_value,
            share=min(1.0, safe_ratio(d.total_value, total)),
        )
        for d in ranked
    ]


def site_investment(
    details: Iterable[InventoryDetail],
    catalog: ReferenceCatalog | None = None,
) -> list[SiteInvestment]:
    """Inventory value per site, highest first."""
    values: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    names: dict[str, str] = {}
    for d in details:
        values[d.site_id] += d.total_value
        counts[d.site_id] += 1
        names[d.site_id] = d.site_name

    rows = []
    for site_id, value in values.items():
        site = catalog.site(site_id) if catalog else None
        rows.append(
            SiteInvestment(
                site_id=site_id,
                site_name=names[site_id],
                inventory_value=value,
                record_count=counts[site_id],
                budget=site.budget if site else 0.0,
            )
        )
    rows.sort(key=lambda r: r.inventory_value, reverse=True)
    return rows


def transfer_savings(movements: Iterable[MovementRequest], catalog: ReferenceCatalog) -> float:
    """Value of approved transfers: capital reused instead of purchased."""
    return sum(
        m.quantity * catalog.item_cost(m.item_id)
        for m in movements
        if m.status == MovementStatus.APPROVED
    )
