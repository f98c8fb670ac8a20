"""
AI advisory entities.

The answer models are what the LLM must return as JSON; AdvisoryResult wraps
any of them so callers never see an LLM failure as an exception.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Answer(BaseModel):
    # Models answer in camelCase more often than not
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Benchmarks(_Answer):
    itr: float = 0.0
    dsi: float = 0.0
    sell_through: float = Field(default=0.0, alias="str")
    dead_stock: float = 0.0
    service_level: float = 0.0


class KPIBenchmarkAnswer(_Answer):
    """Industry benchmarks compared with the current KPIs."""

    benchmarks: Benchmarks = Field(default_factory=Benchmarks)
    analysis: str = ""
    action_plan: list[str] = Field(default_factory=list)


class CriticalItem(_Answer):
    name: str
    reason: str


class StrategicAction(_Answer):
    title: str
    detail: str


class InventoryAnalysisAnswer(_Answer):
    general_status: str = ""
    critical_items: list[CriticalItem] = Field(default_factory=list)
    strategic_actions: list[StrategicAction] = Field(default_factory=list)


class SemanticSearchAnswer(_Answer):
    recommended_skus: list[str] = Field(default_factory=list)


class ExtractedItem(_Answer):
    item_name: str
    quantity: float = 0.0
    matched_sku: str | None = None
    confidence: float = 0.0


class SiteReportAnswer(_Answer):
    extracted_items: list[ExtractedItem] = Field(default_factory=list)
    summary: str = ""


class ChatTurn(BaseModel):
    role: str = Field(pattern="^(user|assistant)$")
    content: str


class AdvisoryResult(BaseModel):
    """Outcome of an advisory call. ``available`` is False when the LLM failed."""

    available: bool = True
    message: str | None = None
    data: dict[str, Any] | None = None
    text: str | None = None
    model: str | None = None

    @classmethod
    def unavailable(cls, message: str) -> "AdvisoryResult":
        return cls(available=False, message=message)
