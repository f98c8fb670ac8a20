"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from src.application.dto.responses import ErrorResponse
from src.config import get_logger
from src.core.exceptions import (
    AuthenticationError,
    BatchNotFoundError,
    ConfigurationError,
    DataProviderError,
    InsufficientStockError,
    InvalidMovementTransitionError,
    InventoryError,
    LLMError,
    ObraError,
    ProviderConnectionError,
    ProviderResponseError,
    SiteNotFoundError,
    ToolNotFoundError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes. First match wins, so subclasses go first.
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    ProviderConnectionError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ProviderResponseError: status.HTTP_502_BAD_GATEWAY,
    DataProviderError: status.HTTP_502_BAD_GATEWAY,
    ToolNotFoundError: status.HTTP_404_NOT_FOUND,
    BatchNotFoundError: status.HTTP_404_NOT_FOUND,
    SiteNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidMovementTransitionError: status.HTTP_409_CONFLICT,
    InsufficientStockError: status.HTTP_409_CONFLICT,
    InventoryError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    LLMError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
    KeyError: status.HTTP_404_NOT_FOUND,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "AUTHENTICATION_FAILED": "Check the username and password.",
    "PROVIDER_UNREACHABLE": "The inventory backend is offline. Retry later or POST /api/auth/demo to use demo data.",
    "PROVIDER_RESPONSE_ERROR": "The inventory backend answered with an error. Check server logs.",
    "TOOL_NOT_FOUND": "Check the tool ID against GET /api/tools.",
    "CONFIGURATION_ERROR": "Fix the named setting in the environment or .env file.",
    "BATCH_NOT_FOUND": "The batch may have been decided already. Try GET /api/movements/pending.",
    "SITE_NOT_FOUND": "Check the site ID against the sites in the current snapshot.",
    "INVALID_TRANSITION": "Only PENDING requests can be approved or rejected.",
    "INSUFFICIENT_STOCK": "The origin site no longer holds enough stock for this transfer.",
    "REJECTION_REASON_REQUIRED": "Provide a non-empty reason to reject the requests.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "LLM_UNAVAILABLE": "The LLM provider is offline. Retry later.",
    "LLM_TIMEOUT": "The LLM request timed out. Retry later.",
    "CIRCUIT_BREAKER_OPEN": "Too many LLM failures. Wait for cooldown before retrying.",
    "ValueError": "A parameter value is invalid. Check the request.",
    "KeyError": "The requested key was not found.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Log in again.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The resource changed since it was loaded. Refresh and retry.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    502: "The upstream service returned an invalid answer.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert exception to standardized JSON response."""
    status_code = _status_for(exc)

    # Prefer ObraError.code, fall back to class name
    error_code = exc.code if isinstance(exc, ObraError) else exc.__class__.__name__
    message = exc.message if isinstance(exc, ObraError) else str(exc)

    request_id = getattr(request.state, "request_id", None)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        error_type=error_code,
        error=message,
        traceback=traceback.format_exc() if status_code == 500 else None,
    )

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error_code=error_code,
            message=message,
            hint=_get_hint(error_code, status_code),
            path=request.url.path,
        ).model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions that escape the route handlers to standardized
    JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(ObraError)
    async def domain_exception_handler(request: Request, exc: ObraError) -> JSONResponse:
        """Handle domain errors raised by use cases."""
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTPException status."""
    return {
        400: "BAD_REQUEST",
        401: "NOT_AUTHENTICATED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        409: "CONFLICT",
        422: "UNPROCESSABLE_ENTITY",
    }.get(status_code, "HTTP_ERROR")
