"""
CSV export for spreadsheet users.

Semicolon separated with a UTF-8 BOM so Excel in Spanish locales opens it
with the right columns and accents. Every value is quoted; line breaks and
semicolons inside values become spaces.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Any

from src.config import get_logger
from src.core.entities.inventory import InventoryDetail
from src.core.exceptions import ValidationError

logger = get_logger(__name__)

BOM = "\ufeff"
SEPARATOR = ";"

_UNSAFE = re.compile(r"\r\n|\n|\r|;")


def _cell(value: Any) -> str:
    text = "" if value is None else str(value)
    text = _UNSAFE.sub(" ", text).replace('"', '""')
    return f'"{text}"'


def to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """
    Render rows as CSV. Column order follows the keys of the first row.

    Raises:
        ValidationError: If there are no rows.
    """
    if not rows:
        raise ValidationError("rows", "No data to export")

    headers = list(rows[0].keys())
    lines = [SEPARATOR.join(headers)]
    lines.extend(SEPARATOR.join(_cell(row.get(h)) for h in headers) for row in rows)
    logger.debug("csv_rendered", rows=len(rows), columns=len(headers))
    return BOM + "\n".join(lines)


def export_filename(name: str, on: date | None = None) -> str:
    """``{name}_{YYYY-MM-DD}.csv``"""
    return f"{name}_{(on or date.today()).isoformat()}.csv"


def inventory_rows(details: Iterable[InventoryDetail]) -> list[dict[str, Any]]:
    return [
        {
            "SKU": d.item_sku,
            "Name": d.item_name,
            "Site": d.site_name,
            "Quantity": d.quantity,
            "Unit": d.unit,
            "UnitCost": d.cost,
            "TotalValue": d.total_value,
            "DaysIdle": d.days_idle,
            "Category": d.category.value,
        }
        for d in details
    ]
