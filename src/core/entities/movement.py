"""Movement (transfer request) entities and their state machine."""

from datetime import datetime
from enum import Enum

from pydantic import Field, model_validator

from src.core.entities.common import DomainModel, UTCDateTime, as_utc, utc_now
from src.core.exceptions import InvalidMovementTransitionError


class MovementStatus(str, Enum):
    """Lifecycle of a transfer request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class MovementRequest(DomainModel):
    """
    Request to move stock of one item between two sites.

    PENDING -> APPROVED and PENDING -> REJECTED are the only transitions.
    Both are terminal. Reason validation happens before ``reject`` is called.
    """

    id: str
    batch_id: str | None = None
    item_id: str
    from_site_id: str
    to_site_id: str
    quantity: float = Field(gt=0)
    request_date: UTCDateTime
    requester_id: str
    status: MovementStatus = MovementStatus.PENDING
    approval_date: UTCDateTime | None = None
    rejection_reason: str | None = None

    @model_validator(mode="after")
    def _distinct_sites(self) -> "MovementRequest":
        if self.from_site_id == self.to_site_id:
            raise ValueError("origin and destination sites must differ")
        return self

    @property
    def is_pending(self) -> bool:
        return self.status == MovementStatus.PENDING

    def _transition(self, target: MovementStatus) -> None:
        if not self.is_pending:
            raise InvalidMovementTransitionError(self.id, self.status.value, target.value)
        self.status = target

    def approve(self, now: datetime | None = None) -> None:
        self._transition(MovementStatus.APPROVED)
        self.approval_date = as_utc(now) if now else utc_now()

    def reject(self, reason: str, now: datetime | None = None) -> None:
        self._transition(MovementStatus.REJECTED)
        self.approval_date = as_utc(now) if now else utc_now()
        self.rejection_reason = reason


class TransferOrderLine(DomainModel):
    """One item of a new transfer order."""

    item_id: str
    quantity: float = Field(gt=0)


class MovementLine(DomainModel):
    """One request inside a batch, with display names and value."""

    movement: MovementRequest
    item_name: str
    item_sku: str
    unit: str
    total_cost: float


class MovementBatch(DomainModel):
    """Pending requests created together, reviewed as one order."""

    id: str
    date: UTCDateTime
    from_name: str
    to_name: str
    items: list[MovementLine] = Field(default_factory=list)
    total_value: float = 0.0

    @property
    def movement_ids(self) -> list[str]:
        return [line.movement.id for line in self.items]


class BatchDecision(DomainModel):
    """Outcome of applying one decision to every line of a batch."""

    batch_id: str | None = None
    status: MovementStatus
    decided_at: UTCDateTime
    applied: list[str] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)

    @property
    def fully_applied(self) -> bool:
        return not self.failed
