"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization. Domain entities are
embedded as-is; they already serialize with camelCase aliases.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.entities import (
    CategorySupply,
    InventoryDetail,
    KPIReport,
    MovementBatch,
    MovementRequest,
    RequisitionCheck,
    SiteInvestment,
    SiteRisk,
    ToolDetail,
    ToolStats,
    TopValueItem,
    User,
)


class ApiResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProviderHealthResponse(ApiResponse):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(ApiResponse):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    mode: str | None = None
    llm: ProviderHealthResponse | None = None
    data_provider: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. BATCH_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


# --- Session ---


class SessionResponse(ApiResponse):
    """Current session state."""

    mode: str = Field(..., description="Active data provider: demo or remote")
    user: User | None = None
    fetched_at: datetime | None = Field(default=None, description="Last snapshot refresh")
    demo_fallback_available: bool = False
    polling: bool = False


# --- Dashboard ---


class DashboardResponse(ApiResponse):
    """Everything the executive dashboard shows in one call."""

    kpis: KPIReport
    weeks_of_supply: list[CategorySupply] = Field(default_factory=list)
    site_risk: list[SiteRisk] = Field(default_factory=list)
    top_items: list[TopValueItem] = Field(default_factory=list)
    site_investment: list[SiteInvestment] = Field(default_factory=list)
    transfer_savings: float = Field(0.0, description="Value of approved transfers")
    tool_alerts: list[ToolDetail] = Field(default_factory=list)
    pending_batches: int = 0


# --- Inventory / tools ---


class InventoryListResponse(ApiResponse):
    items: list[InventoryDetail] = Field(default_factory=list)
    total: int = 0
    total_value: float = 0.0


class ToolsResponse(ApiResponse):
    items: list[ToolDetail] = Field(default_factory=list)
    stats: ToolStats
    alerts: list[ToolDetail] = Field(default_factory=list)


# --- Movements ---


class MovementHistoryEntry(ApiResponse):
    """A decided request with display names."""

    movement: MovementRequest
    item_name: str
    item_sku: str
    from_name: str
    to_name: str
    total_cost: float


class MovementHistoryResponse(ApiResponse):
    items: list[MovementHistoryEntry] = Field(default_factory=list)
    total: int = 0


class PendingBatchesResponse(ApiResponse):
    batches: list[MovementBatch] = Field(default_factory=list)
    total: int = 0
    total_value: float = 0.0


# --- Purchasing ---


class RequisitionCheckResponse(ApiResponse):
    lines: list[RequisitionCheck] = Field(default_factory=list)
    matched: int = 0
    alert_count: int = 0


# --- Users ---


class UserListResponse(ApiResponse):
    users: list[User] = Field(default_factory=list)
    total: int = 0
