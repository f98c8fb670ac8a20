"""Executive dashboard endpoints."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_dashboard_use_case, get_session
from src.application.dto.responses import DashboardResponse
from src.application.session import DashboardSession
from src.application.use_cases import DashboardOverviewUseCase

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    use_case: DashboardOverviewUseCase = Depends(get_dashboard_use_case),
) -> DashboardResponse:
    """KPIs, weeks of supply, site risk, top items, site investment and tool alerts."""
    return await use_case.execute()


@router.post("/refresh", response_model=DashboardResponse)
async def refresh_dashboard(
    session: DashboardSession = Depends(get_session),
    use_case: DashboardOverviewUseCase = Depends(get_dashboard_use_case),
) -> DashboardResponse:
    """Force a snapshot refresh, then rebuild the dashboard."""
    await session.refresh()
    return await use_case.execute()
