"""Project Report Use Case: material balance and wastage of a project site."""

from src.application.session import DashboardSession
from src.config import get_logger
from src.core.entities.project import ProjectStatus
from src.core.services import project_status

logger = get_logger(__name__)


class ProjectReportUseCase:
    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(self, site_id: str) -> ProjectStatus:
        snapshot = await self._session.current()
        status = project_status(
            site_id,
            snapshot.inventory,
            snapshot.transactions,
            snapshot.progress,
            snapshot.catalog,
        )
        logger.info(
            "project_report_built",
            site_id=site_id,
            materials=len(status.materials),
            high_wastage=status.high_wastage_count,
        )
        return status
