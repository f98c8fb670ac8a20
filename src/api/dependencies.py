"""
Dependency injection container for FastAPI.

Provides the dashboard session, use cases and services to route handlers.
Tests override ``get_session`` / ``get_advisory`` via ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends, Request

from src.application.services import get_advisory_service
from src.application.session import DashboardSession
from src.application.use_cases import (
    AdvisoryUseCase,
    ApproveBatchUseCase,
    CheckRequisitionUseCase,
    CreateMovementBatchUseCase,
    CreateUserUseCase,
    DashboardOverviewUseCase,
    ExportInventoryUseCase,
    ListInventoryUseCase,
    ListPendingBatchesUseCase,
    ListUsersUseCase,
    MovementHistoryUseCase,
    ProjectReportUseCase,
    RecordConsumptionUseCase,
    RecordEntryUseCase,
    RejectBatchUseCase,
    ToolsOverviewUseCase,
    UpdateToolStatusUseCase,
)
from src.config import Settings, get_settings
from src.core.interfaces import ILLMProvider
from src.core.services import AdvisoryService
from src.infrastructure.llm import get_llm_provider


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


def get_session(request: Request) -> DashboardSession:
    """Get the dashboard session created at startup."""
    return request.app.state.session


# Service dependencies
def get_llm() -> ILLMProvider:
    """Get LLM provider."""
    return get_llm_provider()


def get_advisory() -> AdvisoryService:
    """Get advisory service."""
    return get_advisory_service()


# Use case dependencies
def get_dashboard_use_case(
    session: DashboardSession = Depends(get_session),
) -> DashboardOverviewUseCase:
    return DashboardOverviewUseCase(session)


def get_list_inventory_use_case(
    session: DashboardSession = Depends(get_session),
) -> ListInventoryUseCase:
    return ListInventoryUseCase(session)


def get_export_inventory_use_case(
    session: DashboardSession = Depends(get_session),
) -> ExportInventoryUseCase:
    return ExportInventoryUseCase(session)


def get_record_consumption_use_case(
    session: DashboardSession = Depends(get_session),
) -> RecordConsumptionUseCase:
    return RecordConsumptionUseCase(session)


def get_record_entry_use_case(
    session: DashboardSession = Depends(get_session),
) -> RecordEntryUseCase:
    return RecordEntryUseCase(session)


def get_tools_use_case(
    session: DashboardSession = Depends(get_session),
) -> ToolsOverviewUseCase:
    return ToolsOverviewUseCase(session)


def get_update_tool_status_use_case(
    session: DashboardSession = Depends(get_session),
) -> UpdateToolStatusUseCase:
    return UpdateToolStatusUseCase(session)


def get_pending_batches_use_case(
    session: DashboardSession = Depends(get_session),
) -> ListPendingBatchesUseCase:
    return ListPendingBatchesUseCase(session)


def get_movement_history_use_case(
    session: DashboardSession = Depends(get_session),
) -> MovementHistoryUseCase:
    return MovementHistoryUseCase(session)


def get_approve_batch_use_case(
    session: DashboardSession = Depends(get_session),
) -> ApproveBatchUseCase:
    return ApproveBatchUseCase(session)


def get_reject_batch_use_case(
    session: DashboardSession = Depends(get_session),
) -> RejectBatchUseCase:
    return RejectBatchUseCase(session)


def get_create_movement_batch_use_case(
    session: DashboardSession = Depends(get_session),
) -> CreateMovementBatchUseCase:
    return CreateMovementBatchUseCase(session)


def get_project_report_use_case(
    session: DashboardSession = Depends(get_session),
) -> ProjectReportUseCase:
    return ProjectReportUseCase(session)


def get_check_requisition_use_case(
    session: DashboardSession = Depends(get_session),
) -> CheckRequisitionUseCase:
    return CheckRequisitionUseCase(session)


def get_list_users_use_case(
    session: DashboardSession = Depends(get_session),
) -> ListUsersUseCase:
    return ListUsersUseCase(session)


def get_create_user_use_case(
    session: DashboardSession = Depends(get_session),
) -> CreateUserUseCase:
    return CreateUserUseCase(session)


def get_advisory_use_case(
    session: DashboardSession = Depends(get_session),
    advisory: AdvisoryService = Depends(get_advisory),
) -> AdvisoryUseCase:
    return AdvisoryUseCase(session, advisory)
