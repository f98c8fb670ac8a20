"""Transfer request endpoints: new orders, pending batches, history and bulk decisions."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_approve_batch_use_case,
    get_create_movement_batch_use_case,
    get_movement_history_use_case,
    get_pending_batches_use_case,
    get_reject_batch_use_case,
)
from src.application.dto.requests import (
    ApproveBatchRequest,
    CreateMovementBatchRequest,
    RejectBatchRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    MovementHistoryResponse,
    PendingBatchesResponse,
)
from src.application.use_cases import (
    ApproveBatchUseCase,
    CreateMovementBatchUseCase,
    ListPendingBatchesUseCase,
    MovementHistoryUseCase,
    RejectBatchUseCase,
)
from src.core.entities.movement import BatchDecision, MovementBatch

router = APIRouter(prefix="/api/movements", tags=["movements"])


@router.get("/pending", response_model=PendingBatchesResponse)
async def pending_batches(
    use_case: ListPendingBatchesUseCase = Depends(get_pending_batches_use_case),
) -> PendingBatchesResponse:
    """Pending requests grouped into batches, in request order."""
    return await use_case.execute()


@router.get("/history", response_model=MovementHistoryResponse)
async def movement_history(
    limit: int | None = Query(default=None, ge=1),
    use_case: MovementHistoryUseCase = Depends(get_movement_history_use_case),
) -> MovementHistoryResponse:
    return await use_case.execute(limit=limit)


@router.post(
    "/approve",
    response_model=BatchDecision,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def approve_batch(
    request: ApproveBatchRequest,
    use_case: ApproveBatchUseCase = Depends(get_approve_batch_use_case),
) -> BatchDecision:
    """
    Approve every line of a batch.

    Lines whose origin lacks stock stay pending and are listed under ``failed``.
    """
    return await use_case.execute(request)


@router.post(
    "/reject",
    response_model=BatchDecision,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def reject_batch(
    request: RejectBatchRequest,
    use_case: RejectBatchUseCase = Depends(get_reject_batch_use_case),
) -> BatchDecision:
    """Reject every line of a batch. A non-empty reason is required."""
    return await use_case.execute(request)


@router.post(
    "",
    response_model=MovementBatch,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_movement_batch(
    request: CreateMovementBatchRequest,
    use_case: CreateMovementBatchUseCase = Depends(get_create_movement_batch_use_case),
) -> MovementBatch:
    """
    Submit a transfer order.

    Every line gets the same batch id and waits for approval as one batch.
    """
    return await use_case.execute(request)
