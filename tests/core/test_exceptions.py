"""Tests for domain exceptions."""

from src.core.exceptions import (
    AuthenticationError,
    DataProviderError,
    InsufficientStockError,
    InventoryError,
    MissingRejectionReasonError,
    ObraError,
    ProviderResponseError,
    ToolNotFoundError,
    ValidationError,
)


class TestObraError:
    def test_default_code_is_class_name(self):
        error = ObraError("boom")
        assert error.code == "ObraError"
        assert error.to_dict() == {"error": "ObraError", "message": "boom", "details": {}}

    def test_provider_errors_share_base(self):
        assert isinstance(AuthenticationError("admin"), DataProviderError)
        assert AuthenticationError("admin").code == "AUTHENTICATION_FAILED"

    def test_response_reason_is_truncated(self):
        error = ProviderResponseError("/inventory", 500, "x" * 500)
        assert len(error.details["reason"]) == 200
        assert error.details["status_code"] == 500

    def test_insufficient_stock_details(self):
        error = InsufficientStockError("i1", "s1", 10, 4)
        assert isinstance(error, InventoryError)
        assert error.details == {"item_id": "i1", "site_id": "s1", "requested": 10, "available": 4}

    def test_missing_reason_is_validation_error(self):
        error = MissingRejectionReasonError("")
        assert isinstance(error, ValidationError)
        assert error.code == "REJECTION_REASON_REQUIRED"
        assert error.details["field"] == "reason"

    def test_tool_not_found(self):
        error = ToolNotFoundError("t9")
        assert isinstance(error, InventoryError)
        assert error.code == "TOOL_NOT_FOUND"
        assert error.details == {"tool_id": "t9"}
