"""
AI advisory use cases.

Bind the advisory service to the current snapshot. Results are always
returned, even when the LLM is down (``available=False``).
"""

from datetime import datetime

from src.application.dto.requests import ChatRequest, SemanticSearchRequest, SiteReportRequest
from src.application.session import DashboardSession
from src.core.entities.advisory import AdvisoryResult
from src.core.entities.kpi import KPIReport
from src.core.services import AdvisoryService, compute_kpis, tool_alerts


class AdvisoryUseCase:
    """One entry point per advisory feature."""

    def __init__(self, session: DashboardSession, advisory: AdvisoryService):
        self._session = session
        self._advisory = advisory

    async def _report(self, now: datetime | None = None) -> KPIReport:
        kpi = self._session.settings.kpi
        snapshot = await self._session.current()
        return compute_kpis(
            await self._session.inventory_details(now),
            snapshot.transactions,
            snapshot.catalog,
            now=now,
            window_days=kpi.window_days,
            dead_stock_days=kpi.dead_stock_days,
            stockout_quantity=kpi.stockout_quantity,
            itr_target=kpi.itr_target,
        )

    async def benchmarks(self, now: datetime | None = None) -> AdvisoryResult:
        return await self._advisory.kpi_benchmarks(await self._report(now))

    async def analysis(self, now: datetime | None = None) -> AdvisoryResult:
        details = await self._session.inventory_details(now)
        alerts = tool_alerts(await self._session.tool_details(now))
        return await self._advisory.analyze_inventory(
            details, await self._report(now), tool_alert_count=len(alerts)
        )

    async def search(self, request: SemanticSearchRequest) -> AdvisoryResult:
        await self._session.current()
        return await self._advisory.semantic_search(request.query, self._session.catalog)

    async def site_report(self, request: SiteReportRequest) -> AdvisoryResult:
        await self._session.current()
        return await self._advisory.parse_site_report(request.text, self._session.catalog)

    async def chat(self, request: ChatRequest) -> AdvisoryResult:
        details = await self._session.inventory_details()
        return await self._advisory.chat(request.history, request.message, details)
