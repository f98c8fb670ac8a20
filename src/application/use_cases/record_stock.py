"""Record Stock Use Cases: site consumption and purchase deliveries."""

from datetime import datetime

from src.application.dto.requests import StockChangeRequest
from src.application.session import DashboardSession
from src.config import get_logger
from src.core.entities.inventory import Transaction
from src.core.entities.item import Item
from src.core.exceptions import ValidationError
from src.core.services.catalog import ReferenceCatalog

logger = get_logger(__name__)


def _resolve_item(request: StockChangeRequest, catalog: ReferenceCatalog) -> Item:
    if request.item_id:
        item = catalog.item(request.item_id)
    elif request.sku:
        item = catalog.item_by_sku(request.sku)
    else:
        raise ValidationError("itemId", "Either itemId or sku is required")
    if item is None:
        raise ValidationError("itemId", "Unknown item", request.item_id or request.sku)
    return item


class RecordConsumptionUseCase:
    """Material installed or used up at a site (never below zero stock)."""

    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(
        self, request: StockChangeRequest, now: datetime | None = None
    ) -> Transaction:
        catalog = (await self._session.current()).catalog
        catalog.require_site(request.site_id)
        item = _resolve_item(request, catalog)

        ledger = await self._session.ledger()
        # Raises InsufficientStockError before anything changes
        return ledger.record_consumption(item.id, request.site_id, request.quantity, now)


class RecordEntryUseCase:
    """Purchase delivery received at a site."""

    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(
        self, request: StockChangeRequest, now: datetime | None = None
    ) -> Transaction:
        catalog = (await self._session.current()).catalog
        catalog.require_site(request.site_id)
        item = _resolve_item(request, catalog)

        ledger = await self._session.ledger()
        tx = ledger.record_entry(item.id, request.site_id, request.quantity, now)
        logger.debug("delivery_received", sku=item.sku, site_id=request.site_id)
        return tx
