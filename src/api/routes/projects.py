"""Project site endpoints."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_project_report_use_case
from src.application.dto.responses import ErrorResponse
from src.application.use_cases import ProjectReportUseCase
from src.core.entities.project import ProjectStatus

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get(
    "/{site_id}",
    response_model=ProjectStatus,
    responses={404: {"model": ErrorResponse}},
)
async def get_project_status(
    site_id: str,
    use_case: ProjectReportUseCase = Depends(get_project_report_use_case),
) -> ProjectStatus:
    """Delivered, on-hand and installed quantities per material, with wastage."""
    return await use_case.execute(site_id)
