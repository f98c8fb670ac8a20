"""Tests for movement batch grouping and bulk decisions."""

from datetime import datetime, timedelta

import pytest

from src.core.entities import MovementStatus, TransferOrderLine
from src.core.exceptions import (
    BatchNotFoundError,
    MissingRejectionReasonError,
    SiteNotFoundError,
    ValidationError,
)
from src.core.services import (
    InventoryLedger,
    MovementApprovalService,
    batch_key,
    group_pending_movements,
)


@pytest.fixture
def batch_movements(make_movement):
    """One order of three lines plus an unrelated request and a decided one."""
    return [
        make_movement("m1", batch_id="B1", item_id="i1", quantity=1),
        make_movement("m2", batch_id="B1", item_id="i2", quantity=1),
        make_movement("m3", batch_id="B1", item_id="i3", quantity=1),
        make_movement("m4", batch_id="B2", item_id="i1", quantity=2, to_site_id="s3"),
        make_movement("m5", batch_id="B1", status=MovementStatus.APPROVED),
    ]


class TestBatchKey:
    def test_explicit_batch_id(self, make_movement):
        assert batch_key(make_movement("m", batch_id="ORD-7")) == "ORD-7"

    def test_fallback_key(self, make_movement):
        # Requested one day before 2026-10-01 12:00 UTC
        assert batch_key(make_movement("m")) == "u3_2026-09-30_s1_s2"


class TestGroupPendingMovements:
    def test_groups_by_key(self, batch_movements, catalog):
        batches = group_pending_movements(batch_movements, catalog)

        assert [b.id for b in batches] == ["B1", "B2"]
        b1 = batches[0]
        assert b1.total_value == 60
        assert len(b1.items) == 3
        assert b1.movement_ids == ["m1", "m2", "m3"]
        assert b1.from_name == "Central Warehouse"
        assert b1.to_name == "Torre Norte"
        assert batches[1].to_name == "Planta Solar"

    def test_line_display_fields(self, batch_movements, catalog):
        line = group_pending_movements(batch_movements, catalog)[0].items[0]
        assert line.item_name == "CABLE THHN 12 AWG"
        assert line.item_sku == "CAB-12"
        assert line.unit == "mts"

    def test_requests_without_batch_id_group_by_day_and_route(self, make_movement, catalog, now):
        movements = [
            make_movement("a"),
            make_movement("b", request_date=now - timedelta(days=1, hours=2)),
            make_movement("c", request_date=now - timedelta(days=3)),
        ]
        batches = group_pending_movements(movements, catalog)
        assert [b.movement_ids for b in batches] == [["a", "b"], ["c"]]

    def test_unknown_item_is_worthless(self, make_movement, catalog):
        [batch] = group_pending_movements([make_movement("x", item_id="ghost")], catalog)
        assert batch.total_value == 0
        assert batch.items[0].item_sku == "N/A"


class TestMovementApprovalService:
    """Tests for MovementApprovalService."""

    def test_approve_shares_date(self, batch_movements, catalog, now):
        service = MovementApprovalService(batch_movements, catalog)

        decision = service.approve_batch("B1", now)

        assert decision.fully_applied
        assert decision.applied == ["m1", "m2", "m3"]
        for movement in batch_movements[:3]:
            assert movement.status == MovementStatus.APPROVED
            assert movement.approval_date == now
        assert batch_movements[3].is_pending
        assert [b.id for b in service.pending_batches()] == ["B2"]

    def test_reject_requires_reason(self, batch_movements, catalog, now):
        service = MovementApprovalService(batch_movements, catalog)

        with pytest.raises(MissingRejectionReasonError) as exc_info:
            service.reject_batch("B1", "   ", now)

        assert exc_info.value.code == "REJECTION_REASON_REQUIRED"
        assert all(m.is_pending for m in batch_movements[:4])

    def test_reject_shares_reason(self, batch_movements, catalog, now):
        service = MovementApprovalService(batch_movements, catalog)

        decision = service.reject_batch("B1", " Over budget ", now)

        assert decision.status == MovementStatus.REJECTED
        for movement in batch_movements[:3]:
            assert movement.status == MovementStatus.REJECTED
            assert movement.rejection_reason == "Over budget"
            assert movement.approval_date == now

    def test_unknown_batch(self, batch_movements, catalog):
        service = MovementApprovalService(batch_movements, catalog)
        with pytest.raises(BatchNotFoundError):
            service.approve_batch("NOPE")

    def test_explicit_ids_report_missing_and_decided(self, batch_movements, catalog, now):
        service = MovementApprovalService(batch_movements, catalog)

        decision = service.approve_batch(["m4", "m5", "ghost"], now)

        assert decision.batch_id is None
        assert decision.applied == ["m4"]
        assert set(decision.failed) == {"m5", "ghost"}

    def test_insufficient_stock_stays_pending(self, make_movement, records, catalog, now):
        movements = [
            make_movement("ok", batch_id="B", item_id="i1", quantity=5),
            # s1 holds no BRK-20
            make_movement("short", batch_id="B", item_id="i3", quantity=1),
        ]
        ledger = InventoryLedger(records)
        service = MovementApprovalService(movements, catalog, ledger)

        decision = service.approve_batch("B", now)

        assert decision.applied == ["ok"]
        assert "short" in decision.failed
        assert movements[0].status == MovementStatus.APPROVED
        assert movements[1].is_pending
        assert ledger.stock_of("i1", "s1") == 95
        assert ledger.stock_of("i1", "s2") == 5

    def test_history_most_recent_first(self, make_movement, catalog, now):
        movements = [
            make_movement("old", status=MovementStatus.REJECTED, approval_date=now - timedelta(days=5)),
            make_movement("new", status=MovementStatus.APPROVED, approval_date=now - timedelta(days=1)),
            make_movement("open"),
        ]
        service = MovementApprovalService(movements, catalog)
        assert [m.id for m in service.history()] == ["new", "old"]

    def test_history_with_naive_and_aware_decision_times(self, make_movement, catalog, now):
        movements = [make_movement("a"), make_movement("b")]
        service = MovementApprovalService(movements, catalog)

        service.approve_batch(["a"], datetime(2026, 10, 2, 9, 0))
        service.reject_batch(["b"], "Duplicate", now)

        assert [m.id for m in service.history()] == ["a", "b"]


class TestSubmitOrder:
    """Tests for MovementApprovalService.submit_order."""

    def test_lines_share_batch_id(self, make_movement, catalog, now):
        movements = [make_movement("existing", batch_id="B0")]
        service = MovementApprovalService(movements, catalog)

        batch = service.submit_order(
            [TransferOrderLine(item_id="i1", quantity=10), TransferOrderLine(item_id="i2", quantity=2)],
            "s1",
            "s3",
            "u3",
            now,
        )

        assert batch.id == f"BATCH-{int(now.timestamp())}"
        assert batch.total_value == 10 * 10 + 2 * 20
        assert batch.to_name == "Planta Solar"
        created = movements[1:]
        assert len(created) == 2
        assert {m.batch_id for m in created} == {batch.id}
        assert all(m.is_pending and m.request_date == now for m in created)
        assert [b.id for b in service.pending_batches()] == ["B0", batch.id]

    def test_same_second_orders_get_distinct_ids(self, catalog, now):
        movements = []
        service = MovementApprovalService(movements, catalog)
        line = [TransferOrderLine(item_id="i1", quantity=1)]

        first = service.submit_order(line, "s1", "s2", "u3", now)
        second = service.submit_order(line, "s1", "s2", "u3", now)

        assert first.id != second.id
        assert second.id == f"{first.id}-2"

    def test_empty_order_rejected(self, catalog, now):
        movements = []
        with pytest.raises(ValidationError) as exc_info:
            MovementApprovalService(movements, catalog).submit_order([], "s1", "s2", "u3", now)
        assert exc_info.value.details["field"] == "items"
        assert movements == []

    def test_same_site_rejected(self, catalog, now):
        movements = []
        with pytest.raises(ValidationError) as exc_info:
            MovementApprovalService(movements, catalog).submit_order(
                [TransferOrderLine(item_id="i1", quantity=1)], "s2", "s2", "u3", now
            )
        assert exc_info.value.details["field"] == "toSiteId"
        assert movements == []

    def test_unknown_site(self, catalog, now):
        with pytest.raises(SiteNotFoundError):
            MovementApprovalService([], catalog).submit_order(
                [TransferOrderLine(item_id="i1", quantity=1)], "s1", "s99", "u3", now
            )

    def test_unknown_item_adds_nothing(self, catalog, now):
        movements = []
        lines = [TransferOrderLine(item_id="i1", quantity=1), TransferOrderLine(item_id="ghost", quantity=1)]
        with pytest.raises(ValidationError):
            MovementApprovalService(movements, catalog).submit_order(lines, "s1", "s2", "u3", now)
        assert movements == []
