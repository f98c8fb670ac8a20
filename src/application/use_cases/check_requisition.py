"""Check Requisition Use Case: stock availability and price alerts for a purchase list."""

from src.application.dto.requests import RequisitionCheckRequest
from src.application.dto.responses import RequisitionCheckResponse
from src.application.session import DashboardSession
from src.core.exceptions import ValidationError
from src.core.services import check_requisition


class CheckRequisitionUseCase:
    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(self, request: RequisitionCheckRequest) -> RequisitionCheckResponse:
        details = await self._session.inventory_details()
        lines = check_requisition(request.text, details, self._session.catalog)
        if not lines:
            raise ValidationError("text", "No requisition lines found", request.text)

        return RequisitionCheckResponse(
            lines=lines,
            matched=sum(1 for line in lines if line.matched),
            alert_count=sum(len(line.alerts) for line in lines),
        )
