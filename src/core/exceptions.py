"""
Domain exceptions for the inventory analytics application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class ObraError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Data provider exceptions
class DataProviderError(ObraError):
    """Base exception for data provider operations."""

    pass


class ProviderConnectionError(DataProviderError):
    """The data provider could not be reached (DNS, refused, timeout)."""

    def __init__(self, url: str, reason: str | None = None):
        super().__init__(
            f"Could not connect to data provider at {url}"
            + (f" - {reason}" if reason else ""),
            code="PROVIDER_UNREACHABLE",
            details={"url": url, "reason": reason},
        )


class AuthenticationError(DataProviderError):
    """Credentials were rejected by the data provider."""

    def __init__(self, username: str | None = None):
        super().__init__(
            "Invalid credentials",
            code="AUTHENTICATION_FAILED",
            details={"username": username},
        )


class ProviderResponseError(DataProviderError):
    """The data provider answered with an error or an unreadable body."""

    def __init__(self, endpoint: str, status_code: int | None, reason: str):
        super().__init__(
            f"Data provider error on {endpoint}: {reason}",
            code="PROVIDER_RESPONSE_ERROR",
            details={
                "endpoint": endpoint,
                "status_code": status_code,
                "reason": reason[:200],
            },
        )


# Inventory / movement exceptions
class InventoryError(ObraError):
    """Base exception for inventory operations."""

    pass


class BatchNotFoundError(InventoryError):
    """No pending batch with the given key."""

    def __init__(self, batch_id: str):
        super().__init__(
            f"Pending batch not found: {batch_id}",
            code="BATCH_NOT_FOUND",
            details={"batch_id": batch_id},
        )


class SiteNotFoundError(InventoryError):
    """Site not present in the reference catalog."""

    def __init__(self, site_id: str):
        super().__init__(
            f"Site not found: {site_id}",
            code="SITE_NOT_FOUND",
            details={"site_id": site_id},
        )


class ToolNotFoundError(InventoryError):
    """Tool not present in the current snapshot."""

    def __init__(self, tool_id: str):
        super().__init__(
            f"Tool not found: {tool_id}",
            code="TOOL_NOT_FOUND",
            details={"tool_id": tool_id},
        )


class InvalidMovementTransitionError(InventoryError):
    """Movement request is already in a terminal state."""

    def __init__(self, movement_id: str, current: str, target: str):
        super().__init__(
            f"Movement {movement_id} cannot go from {current} to {target}",
            code="INVALID_TRANSITION",
            details={"movement_id": movement_id, "current": current, "target": target},
        )


class InsufficientStockError(InventoryError):
    """Origin site does not hold enough stock for a transfer or consumption."""

    def __init__(self, item_id: str, site_id: str, requested: float, available: float):
        super().__init__(
            f"Insufficient stock of {item_id} at {site_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "item_id": item_id,
                "site_id": site_id,
                "requested": requested,
                "available": available,
            },
        )


# LLM Exceptions
class LLMError(ObraError):
    """Base exception for LLM operations."""

    pass


class LLMUnavailableError(LLMError):
    """LLM provider is not available."""

    def __init__(self, provider: str, reason: str | None = None):
        super().__init__(
            f"LLM provider unavailable: {provider}" + (f" - {reason}" if reason else ""),
            code="LLM_UNAVAILABLE",
            details={"provider": provider, "reason": reason},
        )


class LLMTimeoutError(LLMError):
    """LLM request timed out."""

    def __init__(self, timeout: int, operation: str = "generation"):
        super().__init__(
            f"LLM {operation} timed out after {timeout} seconds",
            code="LLM_TIMEOUT",
            details={"timeout": timeout, "operation": operation},
        )


class LLMResponseError(LLMError):
    """LLM returned invalid or empty response."""

    def __init__(self, reason: str, response: str | None = None):
        super().__init__(
            f"Invalid LLM response: {reason}",
            code="LLM_RESPONSE_ERROR",
            details={"reason": reason, "response_preview": (response or "")[:200]},
        )


class ModelNotFoundError(LLMError):
    """Requested model not found."""

    def __init__(self, model: str, provider: str):
        super().__init__(
            f"Model '{model}' not found on {provider}",
            code="MODEL_NOT_FOUND",
            details={"model": model, "provider": provider},
        )


class CircuitBreakerOpenError(LLMError):
    """Circuit breaker is open due to repeated failures."""

    def __init__(self, provider: str, cooldown_remaining: int):
        super().__init__(
            f"Circuit breaker open for {provider}, retry in {cooldown_remaining}s",
            code="CIRCUIT_BREAKER_OPEN",
            details={"provider": provider, "cooldown_remaining": cooldown_remaining},
        )


# Validation Exceptions
class ValidationError(ObraError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class MissingRejectionReasonError(ValidationError):
    """A rejection was attempted without a reason."""

    def __init__(self, value: Any = None):
        super().__init__(
            field="reason",
            message="A reason is required to reject a movement request",
            value=value,
        )
        self.code = "REJECTION_REASON_REQUIRED"


class ConfigurationError(ObraError):
    """A setting names something this build does not support."""

    def __init__(self, setting: str, value: str):
        super().__init__(
            f"Unsupported value for {setting}: {value}",
            code="CONFIGURATION_ERROR",
            details={"setting": setting, "value": value},
        )
