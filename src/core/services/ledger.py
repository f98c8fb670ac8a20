"""
Inventory ledger.

Applies stock changes to an in-memory snapshot of inventory records and
appends the matching transactions. Stock never goes below zero.
"""

import uuid
from datetime import datetime

from src.config import get_logger
from src.core.entities.common import as_utc, utc_now
from src.core.entities.inventory import InventoryRecord, Transaction, TransactionType
from src.core.entities.movement import MovementRequest
from src.core.exceptions import InsufficientStockError, ValidationError

logger = get_logger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class InventoryLedger:
    """
    Mutable view over inventory records and the transaction log.

    The lists passed in are updated in place so the owning snapshot sees
    every change.
    """

    def __init__(
        self,
        records: list[InventoryRecord],
        transactions: list[Transaction] | None = None,
    ) -> None:
        self._records = records
        self._transactions = transactions if transactions is not None else []
        self._index: dict[tuple[str, str], InventoryRecord] = {
            (r.item_id, r.site_id): r for r in records
        }

    @property
    def records(self) -> list[InventoryRecord]:
        return self._records

    @property
    def transactions(self) -> list[Transaction]:
        return self._transactions

    def find(self, item_id: str, site_id: str) -> InventoryRecord | None:
        return self._index.get((item_id, site_id))

    def stock_of(self, item_id: str, site_id: str) -> float:
        record = self.find(item_id, site_id)
        return record.quantity if record else 0.0

    def _append(
        self,
        item_id: str,
        site_id: str,
        quantity: float,
        tx_type: TransactionType,
        now: datetime,
    ) -> Transaction:
        tx = Transaction(
            id=_new_id("tx"),
            item_id=item_id,
            site_id=site_id,
            quantity=quantity,
            date=now,
            type=tx_type,
        )
        self._transactions.append(tx)
        return tx

    def _take(self, item_id: str, site_id: str, quantity: float, now: datetime) -> InventoryRecord:
        record = self.find(item_id, site_id)
        available = record.quantity if record else 0.0
        if record is None or available < quantity:
            raise InsufficientStockError(item_id, site_id, quantity, available)
        record.quantity = available - quantity
        record.last_moved_date = now
        return record

    def _put(self, item_id: str, site_id: str, quantity: float, now: datetime) -> InventoryRecord:
        record = self.find(item_id, site_id)
        if record is None:
            record = InventoryRecord(
                id=_new_id("inv"),
                item_id=item_id,
                site_id=site_id,
                quantity=0.0,
                last_moved_date=now,
            )
            self._records.append(record)
            self._index[(item_id, site_id)] = record
        record.quantity += quantity
        record.last_moved_date = now
        return record

    def apply_transfer(
        self, movement: MovementRequest, now: datetime | None = None
    ) -> tuple[Transaction, Transaction]:
        """
        Move stock from the movement's origin to its destination.

        Raises:
            InsufficientStockError: If the origin holds less than requested.
                Nothing is changed in that case.
        """
        now = as_utc(now) if now else utc_now()

        self._take(movement.item_id, movement.from_site_id, movement.quantity, now)
        self._put(movement.item_id, movement.to_site_id, movement.quantity, now)

        out_tx = self._append(
            movement.item_id, movement.from_site_id, -movement.quantity,
            TransactionType.TRANSFER_OUT, now,
        )
        in_tx = self._append(
            movement.item_id, movement.to_site_id, movement.quantity,
            TransactionType.TRANSFER_IN, now,
        )

        logger.info(
            "transfer_applied",
            movement_id=movement.id,
            item_id=movement.item_id,
            from_site=movement.from_site_id,
            to_site=movement.to_site_id,
            quantity=movement.quantity,
        )
        return out_tx, in_tx

    def record_consumption(
        self,
        item_id: str,
        site_id: str,
        quantity: float,
        now: datetime | None = None,
    ) -> Transaction:
        """Consume stock at a site and log a negative CONSUMPTION entry."""
        if quantity <= 0:
            raise ValidationError("quantity", "Consumption quantity must be positive", quantity)
        now = as_utc(now) if now else utc_now()

        self._take(item_id, site_id, quantity, now)
        tx = self._append(item_id, site_id, -quantity, TransactionType.CONSUMPTION, now)

        logger.info("consumption_recorded", item_id=item_id, site_id=site_id, quantity=quantity)
        return tx

    def record_entry(
        self,
        item_id: str,
        site_id: str,
        quantity: float,
        now: datetime | None = None,
    ) -> Transaction:
        """Receive stock at a site (purchase delivery)."""
        if quantity <= 0:
            raise ValidationError("quantity", "Entry quantity must be positive", quantity)
        now = as_utc(now) if now else utc_now()

        self._put(item_id, site_id, quantity, now)
        tx = self._append(item_id, site_id, quantity, TransactionType.ENTRY, now)

        logger.info("entry_recorded", item_id=item_id, site_id=site_id, quantity=quantity)
        return tx
