"""Dashboard Overview Use Case: KPIs, coverage, risk and capital views."""

from datetime import datetime

from src.application.dto.responses import DashboardResponse
from src.application.session import DashboardSession
from src.config import get_logger
from src.core.entities.common import as_utc, utc_now
from src.core.services import (
    compute_kpis,
    group_pending_movements,
    rank_site_risk,
    site_investment,
    tool_alerts,
    top_value_items,
    transfer_savings,
    weeks_of_supply,
)

logger = get_logger(__name__)

TOP_ITEMS = 10
TOOL_ALERT_LIMIT = 5


class DashboardOverviewUseCase:
    """Aggregate the current snapshot into the executive dashboard."""

    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(self, now: datetime | None = None) -> DashboardResponse:
        now = as_utc(now) if now else utc_now()
        kpi = self._session.settings.kpi

        snapshot = await self._session.current()
        details = await self._session.inventory_details(now)
        tools = await self._session.tool_details(now)
        catalog = snapshot.catalog

        report = compute_kpis(
            details,
            snapshot.transactions,
            catalog,
            now=now,
            window_days=kpi.window_days,
            dead_stock_days=kpi.dead_stock_days,
            stockout_quantity=kpi.stockout_quantity,
            itr_target=kpi.itr_target,
        )

        response = DashboardResponse(
            kpis=report,
            weeks_of_supply=weeks_of_supply(
                details,
                snapshot.transactions,
                catalog,
                now=now,
                window_days=kpi.window_days,
                cap=kpi.weeks_of_supply_cap,
            ),
            site_risk=rank_site_risk(
                details,
                snapshot.transactions,
                catalog,
                now=now,
                window_days=kpi.window_days,
                limit=kpi.site_risk_limit,
            ),
            top_items=top_value_items(details, limit=TOP_ITEMS),
            site_investment=site_investment(details, catalog),
            transfer_savings=transfer_savings(snapshot.movements, catalog),
            tool_alerts=tool_alerts(tools, limit=TOOL_ALERT_LIMIT),
            pending_batches=len(group_pending_movements(snapshot.movements, catalog)),
        )

        logger.info(
            "dashboard_overview_built",
            mode=self._session.mode,
            health_score=round(report.health_score, 1),
            risk_sites=len(response.site_risk),
        )
        return response
