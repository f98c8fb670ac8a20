"""
Purchase requisition check.

Parses a pasted requisition (spreadsheet or CSV lines), matches each line
against the catalog and the enriched stock, and flags quoted prices above
the standard cost or the last purchase price.
"""

import re
from collections.abc import Iterable, Sequence

from src.config import get_logger
from src.core.entities.inventory import InventoryDetail
from src.core.entities.item import Item
from src.core.entities.purchasing import (
    PriceAlert,
    RequisitionCheck,
    RequisitionLine,
    StockLocation,
)
from src.core.services.catalog import ReferenceCatalog

logger = get_logger(__name__)

HEADER_MARKERS = ("nombre", "material")

_NUMBER = re.compile(r"[-+]?(\d+(\.\d*)?|\.\d+)")
_STRIP_CHARS = re.compile(r"['\"$]")


def _clean(value: str) -> str:
    return _STRIP_CHARS.sub("", value).strip()


def _leading_number(value: str) -> float | None:
    match = _NUMBER.match(value)
    return float(match.group(0)) if match else None


def parse_requisition(text: str) -> list[RequisitionLine]:
    """
    Parse requisition text into lines of name, quantity and price.

    Tab-separated lines (pasted from a spreadsheet) win over commas. Missing
    or zero quantities default to 1, missing prices to 0. Header rows are
    skipped.
    """
    lines: list[RequisitionLine] = []
    for raw in text.splitlines():
        if not raw.strip():
            continue
        parts = raw.split("\t" if "\t" in raw else ",")
        name = _clean(parts[0]) or raw.strip()
        if any(marker in name.lower() for marker in HEADER_MARKERS):
            continue

        quantity = _leading_number(_clean(parts[1])) if len(parts) > 1 else None
        price = _leading_number(_clean(parts[2])) if len(parts) > 2 else None
        lines.append(
            RequisitionLine(
                name=name,
                quantity=quantity or 1.0,
                price=price or 0.0,
            )
        )
    return lines


def _matches(needle: str, name: str, sku: str) -> bool:
    return needle in name.lower() or needle in sku.lower()


def _percent_over(price: float, reference: float) -> float | None:
    if reference <= 0:
        return None
    return (price - reference) / reference * 100


def _find_item(needle: str, catalog: ReferenceCatalog) -> Item | None:
    for item in catalog.items.values():
        if _matches(needle, item.name, item.sku):
            return item
    return None


def check_line(
    line: RequisitionLine,
    details: Sequence[InventoryDetail],
    catalog: ReferenceCatalog,
) -> RequisitionCheck:
    needle = line.name.lower()
    item = _find_item(needle, catalog)
    stock_rows = [d for d in details if _matches(needle, d.item_name, d.item_sku)]

    check = RequisitionCheck(
        line=line,
        total_stock=sum(d.quantity for d in stock_rows),
        locations=[
            StockLocation(site_id=d.site_id, site_name=d.site_name, quantity=d.quantity)
            for d in stock_rows
        ],
    )
    if item is None:
        return check

    check.item_id = item.id
    check.item_sku = item.sku
    check.item_name = item.name
    check.standard_cost = item.cost
    check.last_purchase_price = item.last_purchase_price

    if line.price > 0:
        if line.price > item.cost:
            check.alerts.append(PriceAlert.OVER_BUDGET)
            check.budget_diff_percent = _percent_over(line.price, item.cost)
        last = item.last_purchase_price
        if last is not None and line.price > last:
            check.alerts.append(PriceAlert.ABOVE_LAST_PURCHASE)
            check.last_price_diff_percent = _percent_over(line.price, last)

    return check


def check_requisition(
    text: str,
    details: Iterable[InventoryDetail],
    catalog: ReferenceCatalog,
) -> list[RequisitionCheck]:
    """Check every line of a requisition against catalog, stock and prices."""
    rows = list(details)
    results = [check_line(line, rows, catalog) for line in parse_requisition(text)]
    logger.info(
        "requisition_checked",
        lines=len(results),
        matched=sum(1 for r in results if r.matched),
        alerts=sum(len(r.alerts) for r in results),
    )
    return results
