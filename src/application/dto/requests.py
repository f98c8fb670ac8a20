"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation. Field names are accepted in
camelCase (as the dashboard frontend sends them) or snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.entities.advisory import ChatTurn
from src.core.entities.movement import TransferOrderLine
from src.core.entities.tool import ToolStatus
from src.core.entities.user import UserRole


class ApiRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(ApiRequest):
    username: str = Field(..., min_length=1, examples=["admin"])
    password: str = Field(default="", examples=["123"])


class ApproveBatchRequest(ApiRequest):
    """Approve a pending batch by key, or an explicit list of request ids."""

    batch_id: str | None = Field(
        default=None,
        description="Batch key as returned by the pending batches listing",
        examples=["batch-0", "u3_2026-10-01_s1_s4"],
    )
    movement_ids: list[str] | None = Field(
        default=None,
        description="Individual movement request ids (used when batch_id is absent)",
        examples=[["mov0", "mov1"]],
    )


class RejectBatchRequest(ApproveBatchRequest):
    """Same targeting as approval plus the mandatory reason."""

    reason: str = Field(
        default="",
        description="Why the transfer was rejected. Required, blank is refused.",
        examples=["Stock reserved for the origin project"],
    )


class CreateMovementBatchRequest(ApiRequest):
    """New transfer order: several items moving along one route."""

    from_site_id: str = Field(..., min_length=1, examples=["s1"])
    to_site_id: str = Field(..., min_length=1, examples=["s4"])
    items: list[TransferOrderLine] = Field(
        default_factory=list,
        examples=[[{"itemId": "i0", "quantity": 20}]],
    )
    requester_id: str | None = Field(
        default=None,
        description="Defaults to the logged-in user",
    )


class UpdateToolStatusRequest(ApiRequest):
    status: ToolStatus = Field(..., examples=["MAINTENANCE"])


class StockChangeRequest(ApiRequest):
    """Consumption or delivery of one item at one site."""

    site_id: str = Field(..., min_length=1)
    item_id: str | None = Field(default=None, description="Catalog item id")
    sku: str | None = Field(default=None, description="Used when item_id is absent")
    quantity: float = Field(..., gt=0)


class CreateUserRequest(ApiRequest):
    username: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    role: UserRole
    password: str = Field(default="")
    assigned_site_id: str | None = None


class RequisitionCheckRequest(ApiRequest):
    text: str = Field(
        ...,
        description="Requisition lines: name, quantity, price (tab or comma separated)",
        examples=["TUBO EMT 3/4\t100\t18000\nARANDELA 3/8, 500, 120"],
    )


class SemanticSearchRequest(ApiRequest):
    query: str = Field(..., min_length=1, examples=["something to fix conduit to the ceiling"])


class SiteReportRequest(ApiRequest):
    text: str = Field(..., min_length=1, description="Free-text site progress report")


class ChatRequest(ApiRequest):
    message: str = Field(..., min_length=1)
    history: list[ChatTurn] = Field(default_factory=list)
