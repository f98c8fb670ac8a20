"""
Application layer - Session, use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Holding the dashboard session (provider, snapshot, poller)
2. Defining request/response DTOs for API contracts
3. Implementing use cases that coordinate core services
4. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from src.application.services import (
    create_dashboard_session,
    get_advisory_service,
    reset_services,
)
from src.application.session import DashboardSession, Snapshot, SnapshotPoller

__all__ = [
    # Session
    "DashboardSession",
    "Snapshot",
    "SnapshotPoller",
    # Service factories
    "create_dashboard_session",
    "get_advisory_service",
    "reset_services",
]
