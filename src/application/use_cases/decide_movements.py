"""Movement request use cases: new orders, pending batches, history and decisions."""

from datetime import datetime

from src.application.dto.requests import (
    ApproveBatchRequest,
    CreateMovementBatchRequest,
    RejectBatchRequest,
)
from src.application.dto.responses import (
    MovementHistoryEntry,
    MovementHistoryResponse,
    PendingBatchesResponse,
)
from src.application.session import DashboardSession
from src.config import get_logger
from src.core.entities.movement import BatchDecision, MovementBatch
from src.core.exceptions import ValidationError
from src.core.services.movement_batches import BatchTarget

logger = get_logger(__name__)


def _target(request: ApproveBatchRequest) -> BatchTarget:
    if request.batch_id:
        return request.batch_id
    if request.movement_ids:
        return request.movement_ids
    raise ValidationError("batchId", "Either batchId or movementIds is required")


class ListPendingBatchesUseCase:
    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(self) -> PendingBatchesResponse:
        approvals = await self._session.approvals()
        batches = approvals.pending_batches()
        return PendingBatchesResponse(
            batches=batches,
            total=len(batches),
            total_value=sum(b.total_value for b in batches),
        )


class MovementHistoryUseCase:
    """Decided requests, most recent first, with display names."""

    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(self, limit: int | None = None) -> MovementHistoryResponse:
        approvals = await self._session.approvals()
        catalog = self._session.catalog
        decided = approvals.history()
        if limit is not None:
            decided = decided[:limit]

        entries = []
        for movement in decided:
            item = catalog.item(movement.item_id)
            entries.append(
                MovementHistoryEntry(
                    movement=movement,
                    item_name=item.name if item else f"Item {movement.item_id}",
                    item_sku=item.sku if item else "N/A",
                    from_name=catalog.site_name(movement.from_site_id),
                    to_name=catalog.site_name(movement.to_site_id),
                    total_cost=movement.quantity * catalog.item_cost(movement.item_id),
                )
            )
        return MovementHistoryResponse(items=entries, total=len(entries))


class ApproveBatchUseCase:
    """Approve every line of a batch; stock moves with each approved line."""

    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(
        self, request: ApproveBatchRequest, now: datetime | None = None
    ) -> BatchDecision:
        target = _target(request)
        approvals = await self._session.approvals()
        decision = approvals.approve_batch(target, now)
        logger.info(
            "approve_batch_complete",
            batch_id=decision.batch_id,
            applied=len(decision.applied),
            failed=len(decision.failed),
            user=self._session.user.username if self._session.user else None,
        )
        return decision


class RejectBatchUseCase:
    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(
        self, request: RejectBatchRequest, now: datetime | None = None
    ) -> BatchDecision:
        target = _target(request)
        approvals = await self._session.approvals()
        return approvals.reject_batch(target, request.reason, now)


class CreateMovementBatchUseCase:
    """Submit a multi-item transfer order as one pending batch."""

    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(
        self, request: CreateMovementBatchRequest, now: datetime | None = None
    ) -> MovementBatch:
        requester_id = request.requester_id or (
            self._session.user.id if self._session.user else None
        )
        if not requester_id:
            raise ValidationError("requesterId", "Log in or name the requesting user")

        approvals = await self._session.approvals()
        return approvals.submit_order(
            request.items,
            request.from_site_id,
            request.to_site_id,
            requester_id,
            now,
        )
