"""Tool fleet use cases: overview and status changes."""

from datetime import datetime

from src.application.dto.responses import ToolsResponse
from src.application.session import DashboardSession
from src.config import get_logger
from src.core.entities.tool import ToolDetail, ToolStatus
from src.core.exceptions import ToolNotFoundError
from src.core.services import tool_alerts, tool_stats

logger = get_logger(__name__)


class ToolsOverviewUseCase:
    """Enriched tool fleet with stats and the alert shortlist."""

    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(
        self,
        site_id: str | None = None,
        status: ToolStatus | None = None,
        now: datetime | None = None,
    ) -> ToolsResponse:
        details = await self._session.tool_details(now)
        if site_id:
            details = [d for d in details if d.site_id == site_id]
        if status:
            details = [d for d in details if d.status == status]

        return ToolsResponse(
            items=details,
            stats=tool_stats(details),
            alerts=tool_alerts(details),
        )


class UpdateToolStatusUseCase:
    """Move a tool between operative, maintenance, repair and decommissioned."""

    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(
        self, tool_id: str, status: ToolStatus, now: datetime | None = None
    ) -> ToolDetail:
        snapshot = await self._session.current()
        tool = next((t for t in snapshot.tools if t.id == tool_id), None)
        if tool is None:
            raise ToolNotFoundError(tool_id)

        previous = tool.status
        tool.status = status
        logger.info(
            "tool_status_updated",
            tool_id=tool_id,
            previous=previous.value,
            status=status.value,
        )
        details = await self._session.tool_details(now)
        return next(d for d in details if d.id == tool_id)
