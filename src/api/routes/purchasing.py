"""Purchasing endpoints."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_check_requisition_use_case
from src.application.dto.requests import RequisitionCheckRequest
from src.application.dto.responses import ErrorResponse, RequisitionCheckResponse
from src.application.use_cases import CheckRequisitionUseCase

router = APIRouter(prefix="/api/purchasing", tags=["purchasing"])


@router.post(
    "/check",
    response_model=RequisitionCheckResponse,
    responses={400: {"model": ErrorResponse}},
)
async def check_requisition(
    request: RequisitionCheckRequest,
    use_case: CheckRequisitionUseCase = Depends(get_check_requisition_use_case),
) -> RequisitionCheckResponse:
    """
    Check a pasted requisition against stock and prices.

    Flags lines that could be covered by existing stock and prices above the
    standard cost or the last purchase price.
    """
    return await use_case.execute(request)
