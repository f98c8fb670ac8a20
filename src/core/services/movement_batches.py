"""
Transfer orders, movement batches and bulk approval.

Pending transfer requests created together are reviewed as one order. The
approval service applies one decision to every line; each line succeeds or
fails on its own.
"""

import uuid
from collections.abc import Iterable, Sequence
from datetime import datetime

from src.config import get_logger
from src.core.entities.common import as_utc, utc_now
from src.core.entities.movement import (
    BatchDecision,
    MovementBatch,
    MovementLine,
    MovementRequest,
    MovementStatus,
    TransferOrderLine,
)
from src.core.exceptions import (
    BatchNotFoundError,
    InventoryError,
    MissingRejectionReasonError,
    ValidationError,
)
from src.core.services.catalog import ReferenceCatalog
from src.core.services.ledger import InventoryLedger

logger = get_logger(__name__)

BatchTarget = MovementBatch | str | Sequence[str]


def batch_key(movement: MovementRequest) -> str:
    """Explicit batch id, or requester + UTC request day + route."""
    if movement.batch_id:
        return movement.batch_id
    day = movement.request_date.date().isoformat()
    return f"{movement.requester_id}_{day}_{movement.from_site_id}_{movement.to_site_id}"


def _line(movement: MovementRequest, catalog: ReferenceCatalog) -> MovementLine:
    item = catalog.item(movement.item_id)
    cost = item.cost if item else 0.0
    return MovementLine(
        movement=movement,
        item_name=item.name if item else f"Item {movement.item_id}",
        item_sku=item.sku if item else "N/A",
        unit=item.unit if item else "und",
        total_cost=movement.quantity * cost,
    )


def group_pending_movements(
    movements: Iterable[MovementRequest],
    catalog: ReferenceCatalog,
) -> list[MovementBatch]:
    """Group PENDING requests into batches, in order of first appearance."""
    groups: dict[str, MovementBatch] = {}

    for movement in movements:
        if not movement.is_pending:
            continue
        key = batch_key(movement)
        batch = groups.get(key)
        if batch is None:
            batch = MovementBatch(
                id=key,
                date=movement.request_date,
                from_name=catalog.site_name(movement.from_site_id),
                to_name=catalog.site_name(movement.to_site_id),
            )
            groups[key] = batch
        line = _line(movement, catalog)
        batch.items.append(line)
        batch.total_value += line.total_cost

    return list(groups.values())


class MovementApprovalService:
    """
    Applies approve / reject decisions to batches of movement requests.

    Movements are updated in place. When a ledger is attached, approving a
    line first moves the stock; a line whose origin lacks stock stays PENDING.
    """

    def __init__(
        self,
        movements: list[MovementRequest],
        catalog: ReferenceCatalog,
        ledger: InventoryLedger | None = None,
    ) -> None:
        self._movements = movements
        self._catalog = catalog
        self._ledger = ledger

    def pending_batches(self) -> list[MovementBatch]:
        return group_pending_movements(self._movements, self._catalog)

    def history(self) -> list[MovementRequest]:
        """Decided requests, most recent decision first."""
        decided = [m for m in self._movements if not m.is_pending]
        decided.sort(key=lambda m: m.approval_date or m.request_date, reverse=True)
        return decided

    def _new_batch_id(self, now: datetime) -> str:
        taken = {m.batch_id for m in self._movements if m.batch_id}
        base = f"BATCH-{int(now.timestamp())}"
        batch_id, n = base, 1
        while batch_id in taken:
            n += 1
            batch_id = f"{base}-{n}"
        return batch_id

    def submit_order(
        self,
        lines: Sequence[TransferOrderLine],
        from_site_id: str,
        to_site_id: str,
        requester_id: str,
        now: datetime | None = None,
    ) -> MovementBatch:
        """
        Create one PENDING request per line under a shared batch id.

        Raises:
            ValidationError: Empty order, same origin and destination, or an
                item missing from the catalog. Nothing is added.
            SiteNotFoundError: Unknown origin or destination.
        """
        if not lines:
            raise ValidationError("items", "Add at least one item to the order")
        if from_site_id == to_site_id:
            raise ValidationError(
                "toSiteId", "Origin and destination sites must differ", to_site_id
            )
        self._catalog.require_site(from_site_id)
        self._catalog.require_site(to_site_id)
        for line in lines:
            if self._catalog.item(line.item_id) is None:
                raise ValidationError("itemId", "Unknown item", line.item_id)

        requested_at = as_utc(now) if now else utc_now()
        batch_id = self._new_batch_id(requested_at)
        created = [
            MovementRequest(
                id=f"MOV-{uuid.uuid4().hex[:8]}",
                batch_id=batch_id,
                item_id=line.item_id,
                from_site_id=from_site_id,
                to_site_id=to_site_id,
                quantity=line.quantity,
                request_date=requested_at,
                requester_id=requester_id,
            )
            for line in lines
        ]
        self._movements.extend(created)

        logger.info(
            "transfer_order_submitted",
            batch_id=batch_id,
            lines=len(created),
            from_site=from_site_id,
            to_site=to_site_id,
        )
        return group_pending_movements(created, self._catalog)[0]

    def _resolve(self, target: BatchTarget) -> tuple[str | None, list[str]]:
        if isinstance(target, MovementBatch):
            return target.id, target.movement_ids
        if isinstance(target, str):
            for batch in self.pending_batches():
                if batch.id == target:
                    return batch.id, batch.movement_ids
            raise BatchNotFoundError(target)
        return None, list(target)

    def _decide(
        self,
        target: BatchTarget,
        status: MovementStatus,
        now: datetime | None,
        reason: str | None = None,
    ) -> BatchDecision:
        batch_id, ids = self._resolve(target)
        decided_at = as_utc(now) if now else utc_now()
        by_id = {m.id: m for m in self._movements}
        decision = BatchDecision(batch_id=batch_id, status=status, decided_at=decided_at)

        for movement_id in ids:
            movement = by_id.get(movement_id)
            if movement is None:
                decision.failed[movement_id] = "Movement request not found"
                continue
            try:
                if status == MovementStatus.APPROVED:
                    self._approve_line(movement, decided_at)
                else:
                    movement.reject(reason or "", decided_at)
            except InventoryError as e:
                logger.warning(
                    "movement_decision_failed",
                    movement_id=movement_id,
                    status=status.value,
                    error=e.code,
                )
                decision.failed[movement_id] = e.message
                continue
            decision.applied.append(movement_id)

        logger.info(
            "batch_approved" if status == MovementStatus.APPROVED else "batch_rejected",
            batch_id=batch_id,
            applied=len(decision.applied),
            failed=len(decision.failed),
        )
        return decision

    def _approve_line(self, movement: MovementRequest, now: datetime) -> None:
        # Validate the transition before touching stock
        if not movement.is_pending:
            movement.approve(now)
        if self._ledger is not None:
            self._ledger.apply_transfer(movement, now)
        movement.approve(now)

    def approve_batch(self, target: BatchTarget, now: datetime | None = None) -> BatchDecision:
        """Approve every line of a batch with a shared approval date."""
        return self._decide(target, MovementStatus.APPROVED, now)

    def reject_batch(
        self,
        target: BatchTarget,
        reason: str,
        now: datetime | None = None,
    ) -> BatchDecision:
        """
        Reject every line of a batch with a shared reason and date.

        Raises:
            MissingRejectionReasonError: If the reason is empty or blank.
                No movement is modified.
        """
        cleaned = (reason or "").strip()
        if not cleaned:
            raise MissingRejectionReasonError(reason)
        return self._decide(target, MovementStatus.REJECTED, now, cleaned)
