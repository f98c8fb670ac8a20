"""Tests for the in-memory inventory ledger."""

import pytest

from src.core.entities import TransactionType
from src.core.exceptions import InsufficientStockError, ValidationError
from src.core.services import InventoryLedger


class TestInventoryLedger:
    def test_transfer_moves_stock_and_logs_both_sides(self, records, make_movement, now):
        transactions = []
        ledger = InventoryLedger(records, transactions)

        out_tx, in_tx = ledger.apply_transfer(make_movement("m", quantity=30), now)

        assert ledger.stock_of("i1", "s1") == 70
        assert ledger.stock_of("i1", "s2") == 30
        assert out_tx.quantity == -30
        assert out_tx.type == TransactionType.TRANSFER_OUT
        assert in_tx.type == TransactionType.TRANSFER_IN
        assert transactions == [out_tx, in_tx]
        # A new destination record lands in the caller's list
        assert len(records) == 4
        assert records[-1].last_moved_date == now

    def test_transfer_without_stock_changes_nothing(self, records, make_movement, now):
        ledger = InventoryLedger(records)

        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.apply_transfer(make_movement("m", quantity=101), now)

        assert exc_info.value.details["available"] == 100
        assert ledger.stock_of("i1", "s1") == 100
        assert ledger.transactions == []
        assert len(records) == 3

    def test_consumption(self, records, now):
        ledger = InventoryLedger(records)

        tx = ledger.record_consumption("i3", "s2", 3, now)

        assert tx.quantity == -3
        assert tx.type == TransactionType.CONSUMPTION
        assert ledger.stock_of("i3", "s2") == 0

    def test_consumption_must_be_positive(self, records):
        with pytest.raises(ValidationError):
            InventoryLedger(records).record_consumption("i1", "s1", 0)

    def test_entry_creates_record(self, records, now):
        ledger = InventoryLedger(records)

        tx = ledger.record_entry("i2", "s3", 12, now)

        assert tx.type == TransactionType.ENTRY
        assert ledger.stock_of("i2", "s3") == 12
        assert ledger.find("i2", "s3") is records[-1]

    def test_unknown_pair_has_no_stock(self, records):
        assert InventoryLedger(records).stock_of("ghost", "s1") == 0
