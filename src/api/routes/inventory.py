"""Inventory listing, export and stock recording endpoints."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from src.api.dependencies import (
    get_export_inventory_use_case,
    get_list_inventory_use_case,
    get_record_consumption_use_case,
    get_record_entry_use_case,
)
from src.application.dto.requests import StockChangeRequest
from src.application.dto.responses import ErrorResponse, InventoryListResponse
from src.application.use_cases import (
    ExportInventoryUseCase,
    InventoryQuery,
    ListInventoryUseCase,
    RecordConsumptionUseCase,
    RecordEntryUseCase,
)
from src.core.entities.inventory import InventoryStatus, Transaction
from src.core.entities.item import ItemCategory
from src.core.services.enrichment import SortKey

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


def inventory_query(
    status: InventoryStatus = InventoryStatus.ALL,
    site_id: str | None = Query(default=None, alias="siteId"),
    category: ItemCategory | None = None,
    search: str | None = None,
    skus: list[str] | None = Query(default=None),
    sort_by: SortKey | None = Query(default=None, alias="sortBy"),
    descending: bool = False,
) -> InventoryQuery:
    return InventoryQuery(
        status=status,
        site_id=site_id,
        category=category,
        search=search,
        skus=skus,
        sort_by=sort_by,
        descending=descending,
    )


@router.get("", response_model=InventoryListResponse)
async def list_inventory(
    query: InventoryQuery = Depends(inventory_query),
    use_case: ListInventoryUseCase = Depends(get_list_inventory_use_case),
) -> InventoryListResponse:
    """Enriched inventory rows (aging, value, stagnation) filtered by status and site."""
    return await use_case.execute(query)


@router.get(
    "/export",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}},
        400: {"model": ErrorResponse},
    },
)
async def export_inventory(
    query: InventoryQuery = Depends(inventory_query),
    use_case: ExportInventoryUseCase = Depends(get_export_inventory_use_case),
) -> Response:
    """Download the filtered listing as a semicolon separated CSV."""
    export = await use_case.execute(query)
    return Response(
        content=export.content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.post(
    "/consumption",
    response_model=Transaction,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def record_consumption(
    request: StockChangeRequest,
    use_case: RecordConsumptionUseCase = Depends(get_record_consumption_use_case),
) -> Transaction:
    """Deduct material used at a site. Refused when the site holds less."""
    return await use_case.execute(request)


@router.post(
    "/entries",
    response_model=Transaction,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_entry(
    request: StockChangeRequest,
    use_case: RecordEntryUseCase = Depends(get_record_entry_use_case),
) -> Transaction:
    return await use_case.execute(request)
