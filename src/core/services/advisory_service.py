"""
AI advisory service.

Builds prompts from KPI snapshots and catalog context, asks the LLM for JSON
answers and validates them with pydantic. Every method returns an
AdvisoryResult: LLM failures are reported, never raised.
"""

import json
import re
from collections.abc import Sequence
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.config import get_logger
from src.core.entities.advisory import (
    AdvisoryResult,
    ChatTurn,
    InventoryAnalysisAnswer,
    KPIBenchmarkAnswer,
    SemanticSearchAnswer,
    SiteReportAnswer,
)
from src.core.entities.inventory import InventoryDetail
from src.core.entities.kpi import KPIReport
from src.core.exceptions import LLMError
from src.core.interfaces.llm import ILLMProvider
from src.core.services.catalog import ReferenceCatalog

logger = get_logger(__name__)

AnswerT = TypeVar("AnswerT", bound=BaseModel)

# Enriched rows passed to the chat assistant as context
CHAT_CONTEXT_ROWS = 30
# Stagnant rows quoted in the inventory analysis prompt
ANALYSIS_CRITICAL_ROWS = 5

UNAVAILABLE_MESSAGE = "AI advisory is temporarily unavailable"

SYSTEM_PROMPT = (
    "You are a logistics analyst for an electrical construction contractor. "
    "You review warehouse and project-site inventory. Be concise and concrete."
)

JSON_INSTRUCTION = "Respond with a single JSON object only, no prose, matching this shape:\n"

BENCHMARK_SHAPE = (
    '{"benchmarks": {"itr": number, "dsi": number, "str": number, '
    '"deadStock": number, "serviceLevel": number}, '
    '"analysis": string, "actionPlan": [string]}'
)
ANALYSIS_SHAPE = (
    '{"generalStatus": string, "criticalItems": [{"name": string, "reason": string}], '
    '"strategicActions": [{"title": string, "detail": string}]}'
)
SEARCH_SHAPE = '{"recommendedSkus": [string]}'
SITE_REPORT_SHAPE = (
    '{"extractedItems": [{"itemName": string, "quantity": number, '
    '"matchedSku": string or null, "confidence": number}], "summary": string}'
)


def extract_json_string(text: str) -> str | None:
    """Extract a JSON object from LLM output (bare, fenced or embedded)."""
    text = text.strip()
    if text.startswith("{"):
        return text

    match = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
    if match:
        return match.group(1).strip()

    match = re.search(r"\{[\s\S]*\}", text)
    if match:
        return match.group(0)

    return None


def parse_answer(text: str, model: type[AnswerT]) -> tuple[AnswerT | None, list[str]]:
    """
    Parse and validate a JSON answer.

    Returns:
        Tuple of (validated answer, list of errors)
    """
    errors: list[str] = []

    json_str = extract_json_string(text)
    if not json_str:
        errors.append("No JSON object found in response")
        return None, errors

    try:
        raw = json.loads(json_str)
    except json.JSONDecodeError as e:
        errors.append(f"Invalid JSON syntax: {e}")
        return None, errors

    try:
        return model.model_validate(raw), errors
    except PydanticValidationError as e:
        for err in e.errors():
            field = ".".join(str(loc) for loc in err["loc"])
            errors.append(f"Validation error at '{field}': {err['msg']}")
        return None, errors


def _catalog_context(catalog: ReferenceCatalog) -> str:
    return "\n".join(
        f"{item.sku} | {item.name} | {item.category.value}" for item in catalog.items.values()
    )


def _row_context(detail: InventoryDetail) -> str:
    return (
        f"{detail.item_sku}: {detail.item_name} ({detail.quantity:g} {detail.unit}) "
        f"at {detail.site_name} - aging {detail.days_idle}d"
    )


class AdvisoryService:
    """
    LLM-backed advisory features for the dashboard.

    The provider is injected; this service never imports infrastructure.
    """

    def __init__(
        self,
        llm_provider: ILLMProvider,
        temperature: float = 0.2,
        max_tokens: int = 2048,
    ) -> None:
        self._llm = llm_provider
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def _ask_json(
        self,
        operation: str,
        prompt: str,
        shape: str,
        model: type[AnswerT],
    ) -> tuple[AnswerT | None, AdvisoryResult | None, str | None]:
        try:
            response = await self._llm.generate(
                prompt=f"{prompt}\n\n{JSON_INSTRUCTION}{shape}",
                system_prompt=SYSTEM_PROMPT,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                json_mode=True,
            )
        except LLMError as e:
            logger.warning("advisory_llm_failed", operation=operation, error=e.code)
            return None, AdvisoryResult.unavailable(UNAVAILABLE_MESSAGE), None

        answer, errors = parse_answer(response.text, model)
        if answer is None:
            logger.warning(
                "advisory_json_validation_failed",
                operation=operation,
                errors=errors,
                raw_response_preview=response.text[:300],
            )
            return None, AdvisoryResult.unavailable("AI answer could not be understood"), None

        logger.info("advisory_answered", operation=operation, model=response.model)
        return answer, None, response.model

    async def kpi_benchmarks(self, report: KPIReport) -> AdvisoryResult:
        """Compare current KPIs with electrical-industry benchmarks."""
        metrics = {
            "itr": round(report.itr, 4),
            "dsi": round(report.dsi, 1),
            "str": round(report.sell_through_rate, 4),
            "deadStockRate": round(report.dead_stock_rate, 4),
            "serviceLevel": round(report.service_level, 4),
            "healthScore": round(report.health_score, 1),
            "windowDays": report.window_days,
        }
        prompt = (
            "Compare these inventory KPIs with typical values for electrical "
            "contractors and propose an action plan:\n"
            f"{json.dumps(metrics)}"
        )
        answer, failure, model = await self._ask_json(
            "kpi_benchmarks", prompt, BENCHMARK_SHAPE, KPIBenchmarkAnswer
        )
        if failure:
            return failure
        return AdvisoryResult(data=answer.model_dump(by_alias=True), model=model)

    async def analyze_inventory(
        self,
        details: Sequence[InventoryDetail],
        report: KPIReport,
        tool_alert_count: int = 0,
    ) -> AdvisoryResult:
        """General status, critical items and strategic actions for the snapshot."""
        stagnant = sorted(
            (d for d in details if d.is_stagnant), key=lambda d: d.total_value, reverse=True
        )[:ANALYSIS_CRITICAL_ROWS]
        summary = (
            f"Total value: ${report.total_stock_value:,.0f}. "
            f"Dead stock: ${report.dead_stock_value:,.0f}. "
            f"Monthly turnover: {report.itr:.2f}x. "
            f"Tool alerts: {tool_alert_count}."
        )
        critical = "\n".join(
            f"- {d.item_name}: ${d.total_value:,.0f} ({d.days_idle}d)" for d in stagnant
        )
        prompt = f"Analyze this inventory: {summary}\nStagnant items:\n{critical or '- none'}"

        answer, failure, model = await self._ask_json(
            "analyze_inventory", prompt, ANALYSIS_SHAPE, InventoryAnalysisAnswer
        )
        if failure:
            return failure
        return AdvisoryResult(data=answer.model_dump(by_alias=True), model=model)

    async def semantic_search(self, query: str, catalog: ReferenceCatalog) -> AdvisoryResult:
        """Natural-language material search. Only SKUs present in the catalog are returned."""
        prompt = (
            "A user is looking for electrical materials in plain language. "
            "Pick the catalog SKUs that best satisfy the request. "
            "Only return SKUs that appear in the catalog.\n\n"
            f"CATALOG (SKU | Name | Category):\n{_catalog_context(catalog)}\n\n"
            f'QUERY: "{query}"'
        )
        answer, failure, model = await self._ask_json(
            "semantic_search", prompt, SEARCH_SHAPE, SemanticSearchAnswer
        )
        if failure:
            return failure

        known = {item.sku for item in catalog.items.values()}
        skus = [sku for sku in dict.fromkeys(answer.recommended_skus) if sku in known]
        if len(skus) < len(answer.recommended_skus):
            logger.debug(
                "advisory_unknown_skus_dropped",
                dropped=len(answer.recommended_skus) - len(skus),
            )
        return AdvisoryResult(data={"recommendedSkus": skus}, model=model)

    async def parse_site_report(self, text: str, catalog: ReferenceCatalog) -> AdvisoryResult:
        """Extract installed quantities from a free-text site progress report."""
        catalog_lines = "\n".join(f"{i.sku}: {i.name}" for i in catalog.items.values())
        prompt = (
            "Extract the installed materials from this site progress report, "
            "matching each one to a catalog SKU when possible.\n"
            f"CATALOG:\n{catalog_lines}\n\nREPORT:\n{text}"
        )
        answer, failure, model = await self._ask_json(
            "parse_site_report", prompt, SITE_REPORT_SHAPE, SiteReportAnswer
        )
        if failure:
            return failure

        known = {item.sku for item in catalog.items.values()}
        for extracted in answer.extracted_items:
            if extracted.matched_sku and extracted.matched_sku not in known:
                extracted.matched_sku = None
        return AdvisoryResult(data=answer.model_dump(by_alias=True), model=model)

    async def chat(
        self,
        history: Sequence[ChatTurn],
        message: str,
        details: Sequence[InventoryDetail],
    ) -> AdvisoryResult:
        """Free-text assistant grounded on the first enriched inventory rows."""
        context = " | ".join(_row_context(d) for d in details[:CHAT_CONTEXT_ROWS])
        messages = [
            {
                "role": "system",
                "content": (
                    f"{SYSTEM_PROMPT}\nCurrent inventory context: {context}\n"
                    "Answer professionally and briefly. Use markdown for lists."
                ),
            },
            *({"role": turn.role, "content": turn.content} for turn in history),
            {"role": "user", "content": message},
        ]

        try:
            response = await self._llm.chat(
                messages=messages,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except LLMError as e:
            logger.warning("advisory_llm_failed", operation="chat", error=e.code)
            return AdvisoryResult.unavailable(UNAVAILABLE_MESSAGE)

        text = response.text.strip() or "I could not generate an answer."
        return AdvisoryResult(text=text, model=response.model)
