"""Inventory listing and CSV export use cases."""

from dataclasses import dataclass, field
from datetime import date, datetime

from src.application.dto.responses import InventoryListResponse
from src.application.session import DashboardSession
from src.config import get_logger
from src.core.entities.inventory import InventoryDetail, InventoryStatus
from src.core.entities.item import ItemCategory
from src.core.entities.user import UserRole
from src.core.services import filter_inventory
from src.core.services.enrichment import SortKey

logger = get_logger(__name__)


@dataclass
class InventoryQuery:
    """Listing filters as chosen in the inventory view."""

    status: InventoryStatus = InventoryStatus.ALL
    site_id: str | None = None
    category: ItemCategory | None = None
    search: str | None = None
    skus: list[str] | None = field(default=None)
    sort_by: SortKey | None = None
    descending: bool = False


class ListInventoryUseCase:
    """
    Filtered, enriched inventory rows.

    Site managers only ever see their assigned site.
    """

    def __init__(self, session: DashboardSession):
        self._session = session

    def _scoped_site(self, query: InventoryQuery) -> str | None:
        user = self._session.user
        if user and user.role == UserRole.SITE_MANAGER and user.assigned_site_id:
            return user.assigned_site_id
        return query.site_id

    async def rows(
        self, query: InventoryQuery, now: datetime | None = None
    ) -> list[InventoryDetail]:
        details = await self._session.inventory_details(now)
        return filter_inventory(
            details,
            query.status,
            self._session.thresholds,
            site_id=self._scoped_site(query),
            category=query.category,
            search=query.search,
            skus=query.skus,
            sort_by=query.sort_by,
            descending=query.descending,
        )

    async def execute(
        self, query: InventoryQuery, now: datetime | None = None
    ) -> InventoryListResponse:
        rows = await self.rows(query, now)
        logger.debug("inventory_listed", status=query.status.value, rows=len(rows))
        return InventoryListResponse(
            items=rows,
            total=len(rows),
            total_value=sum(r.total_value for r in rows),
        )


@dataclass
class CsvExport:
    filename: str
    content: str


class ExportInventoryUseCase:
    """Render the filtered listing as a spreadsheet-friendly CSV."""

    def __init__(self, session: DashboardSession):
        self._listing = ListInventoryUseCase(session)

    async def execute(
        self,
        query: InventoryQuery,
        now: datetime | None = None,
        on: date | None = None,
    ) -> CsvExport:
        # Lazy import infrastructure
        from src.infrastructure.export import export_filename, inventory_rows, to_csv

        rows = await self._listing.rows(query, now)
        export = CsvExport(
            filename=export_filename("inventory", on=on),
            content=to_csv(inventory_rows(rows)),
        )
        logger.info("inventory_exported", rows=len(rows), filename=export.filename)
        return export
