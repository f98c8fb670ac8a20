"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    ApproveBatchRequest,
    ChatRequest,
    CreateMovementBatchRequest,
    CreateUserRequest,
    LoginRequest,
    RejectBatchRequest,
    RequisitionCheckRequest,
    SemanticSearchRequest,
    SiteReportRequest,
    StockChangeRequest,
    UpdateToolStatusRequest,
)
from src.application.dto.responses import (
    DashboardResponse,
    ErrorResponse,
    HealthResponse,
    InventoryListResponse,
    MovementHistoryEntry,
    MovementHistoryResponse,
    PendingBatchesResponse,
    ProviderHealthResponse,
    RequisitionCheckResponse,
    SessionResponse,
    ToolsResponse,
    UserListResponse,
)

__all__ = [
    # Requests
    "LoginRequest",
    "ApproveBatchRequest",
    "RejectBatchRequest",
    "CreateMovementBatchRequest",
    "UpdateToolStatusRequest",
    "StockChangeRequest",
    "CreateUserRequest",
    "RequisitionCheckRequest",
    "SemanticSearchRequest",
    "SiteReportRequest",
    "ChatRequest",
    # Responses
    "SessionResponse",
    "DashboardResponse",
    "InventoryListResponse",
    "ToolsResponse",
    "MovementHistoryEntry",
    "MovementHistoryResponse",
    "PendingBatchesResponse",
    "RequisitionCheckResponse",
    "UserListResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
]
