"""Tool fleet endpoints."""

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_tools_use_case, get_update_tool_status_use_case
from src.application.dto.requests import UpdateToolStatusRequest
from src.application.dto.responses import ErrorResponse, ToolsResponse
from src.application.use_cases import ToolsOverviewUseCase, UpdateToolStatusUseCase
from src.core.entities.tool import ToolDetail, ToolStats, ToolStatus

router = APIRouter(prefix="/api/tools", tags=["tools"])


@router.get("", response_model=ToolsResponse)
async def list_tools(
    site_id: str | None = Query(default=None, alias="siteId"),
    status: ToolStatus | None = None,
    use_case: ToolsOverviewUseCase = Depends(get_tools_use_case),
) -> ToolsResponse:
    """Tools with maintenance and warranty countdowns."""
    return await use_case.execute(site_id=site_id, status=status)


@router.get("/alerts", response_model=list[ToolDetail])
async def tool_alerts(
    limit: int | None = Query(default=None, ge=1),
    use_case: ToolsOverviewUseCase = Depends(get_tools_use_case),
) -> list[ToolDetail]:
    """Tools due for maintenance within a week or with warranty ending within a month."""
    overview = await use_case.execute()
    return overview.alerts[:limit] if limit else overview.alerts


@router.get("/stats", response_model=ToolStats)
async def tool_stats(
    use_case: ToolsOverviewUseCase = Depends(get_tools_use_case),
) -> ToolStats:
    overview = await use_case.execute()
    return overview.stats


@router.patch(
    "/{tool_id}/status",
    response_model=ToolDetail,
    responses={404: {"model": ErrorResponse}},
)
async def update_tool_status(
    tool_id: str,
    request: UpdateToolStatusRequest,
    use_case: UpdateToolStatusUseCase = Depends(get_update_tool_status_use_case),
) -> ToolDetail:
    """Send a tool to maintenance or repair, or back into service."""
    return await use_case.execute(tool_id, request.status)
