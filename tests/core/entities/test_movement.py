"""Tests for the movement request state machine."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from src.core.entities.movement import BatchDecision, MovementStatus
from src.core.exceptions import InvalidMovementTransitionError


class TestMovementRequest:
    """Tests for MovementRequest transitions."""

    def test_defaults_to_pending(self, make_movement):
        movement = make_movement("m1")
        assert movement.status == MovementStatus.PENDING
        assert movement.is_pending
        assert movement.approval_date is None

    def test_approve_sets_date(self, make_movement, now):
        movement = make_movement("m1")
        movement.approve(now)
        assert movement.status == MovementStatus.APPROVED
        assert movement.approval_date == now
        assert movement.rejection_reason is None

    def test_reject_sets_reason_and_date(self, make_movement, now):
        movement = make_movement("m1")
        movement.reject("Stock reserved", now)
        assert movement.status == MovementStatus.REJECTED
        assert movement.approval_date == now
        assert movement.rejection_reason == "Stock reserved"

    @pytest.mark.parametrize("terminal", [MovementStatus.APPROVED, MovementStatus.REJECTED])
    def test_terminal_states_cannot_change(self, make_movement, terminal):
        movement = make_movement("m1", status=terminal)
        with pytest.raises(InvalidMovementTransitionError) as exc_info:
            movement.approve()
        assert exc_info.value.code == "INVALID_TRANSITION"
        assert movement.status == terminal

        with pytest.raises(InvalidMovementTransitionError):
            movement.reject("late")
        assert movement.status == terminal

    def test_quantity_must_be_positive(self, make_movement):
        with pytest.raises(ValueError):
            make_movement("m1", quantity=0)

    def test_parses_camel_case_payload(self):
        from src.core.entities.movement import MovementRequest

        movement = MovementRequest.model_validate(
            {
                "id": "mov1",
                "itemId": "i1",
                "fromSiteId": "s1",
                "toSiteId": "s2",
                "quantity": 5,
                "requestDate": "2026-09-30T10:00:00",
                "requesterId": "u3",
                "status": "PENDING",
            }
        )
        assert movement.from_site_id == "s1"
        # Naive timestamps are read as UTC
        assert movement.request_date == datetime(2026, 9, 30, 10, 0, tzinfo=UTC)


class TestBatchDecision:
    def test_fully_applied(self, now):
        decision = BatchDecision(status=MovementStatus.APPROVED, decided_at=now, applied=["m1"])
        assert decision.fully_applied

    def test_partial(self, now):
        decision = BatchDecision(
            status=MovementStatus.APPROVED,
            decided_at=now,
            applied=["m1"],
            failed={"m2": "Insufficient stock"},
        )
        assert not decision.fully_applied
        assert decision.model_dump(by_alias=True)["batchId"] is None


class TestMovementRoute:
    def test_same_origin_and_destination_rejected(self, make_movement):
        with pytest.raises(ValueError, match="must differ"):
            make_movement("m1", from_site_id="s1", to_site_id="s1")


class TestDecisionDates:
    def test_naive_decision_time_is_stored_as_utc(self, make_movement):
        movement = make_movement("m1")
        movement.approve(datetime(2026, 10, 2, 9, 0))
        assert movement.approval_date == datetime(2026, 10, 2, 9, 0, tzinfo=UTC)

    def test_reject_normalizes_offset(self, make_movement):
        bogota = timezone(timedelta(hours=-5))
        movement = make_movement("m1")
        movement.reject("Stock reserved", datetime(2026, 10, 2, 4, 0, tzinfo=bogota))
        assert movement.approval_date == datetime(2026, 10, 2, 9, 0, tzinfo=UTC)
        assert movement.approval_date.tzinfo == UTC
