"""Application use cases."""

from src.application.use_cases.advisory import AdvisoryUseCase
from src.application.use_cases.check_requisition import CheckRequisitionUseCase
from src.application.use_cases.dashboard_overview import DashboardOverviewUseCase
from src.application.use_cases.decide_movements import (
    ApproveBatchUseCase,
    CreateMovementBatchUseCase,
    ListPendingBatchesUseCase,
    MovementHistoryUseCase,
    RejectBatchUseCase,
)
from src.application.use_cases.inventory_listing import (
    CsvExport,
    ExportInventoryUseCase,
    InventoryQuery,
    ListInventoryUseCase,
)
from src.application.use_cases.manage_users import CreateUserUseCase, ListUsersUseCase
from src.application.use_cases.project_report import ProjectReportUseCase
from src.application.use_cases.record_stock import RecordConsumptionUseCase, RecordEntryUseCase
from src.application.use_cases.tools_overview import ToolsOverviewUseCase, UpdateToolStatusUseCase

__all__ = [
    "DashboardOverviewUseCase",
    "InventoryQuery",
    "ListInventoryUseCase",
    "ExportInventoryUseCase",
    "CsvExport",
    "ToolsOverviewUseCase",
    "UpdateToolStatusUseCase",
    "RecordConsumptionUseCase",
    "RecordEntryUseCase",
    "ListPendingBatchesUseCase",
    "MovementHistoryUseCase",
    "ApproveBatchUseCase",
    "RejectBatchUseCase",
    "CreateMovementBatchUseCase",
    "ProjectReportUseCase",
    "CheckRequisitionUseCase",
    "ListUsersUseCase",
    "CreateUserUseCase",
    "AdvisoryUseCase",
]
