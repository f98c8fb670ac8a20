"""
Service factory functions for dependency injection.

This module provides factory functions that wire infrastructure
implementations to core services. Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from src.application.session import DashboardSession
from src.config import get_settings
from src.core.services import AdvisoryService

if TYPE_CHECKING:
    from src.core.interfaces import IDataProvider, ILLMProvider


# Singleton service instances
_advisory_service: AdvisoryService | None = None


def get_advisory_service(llm_provider: "ILLMProvider | None" = None) -> AdvisoryService:
    """
    Get or create AdvisoryService instance.

    Args:
        llm_provider: Optional LLM provider override

    Returns:
        Configured AdvisoryService
    """
    global _advisory_service

    if _advisory_service is not None and llm_provider is None:
        return _advisory_service

    # Lazy import infrastructure
    from src.infrastructure.llm import get_llm_provider

    settings = get_settings()
    service = AdvisoryService(
        llm_provider=llm_provider or get_llm_provider(),
        temperature=settings.llm.temperature,
        max_tokens=settings.llm.max_tokens,
    )

    if llm_provider is None:
        _advisory_service = service

    return service


def create_dashboard_session(provider: "IDataProvider | None" = None) -> DashboardSession:
    """
    Create a dashboard session over the configured data provider.

    Args:
        provider: Optional data provider override

    Returns:
        New DashboardSession (not logged in, no snapshot yet)
    """
    from src.infrastructure.providers import get_data_provider

    return DashboardSession(provider or get_data_provider(), get_settings())


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _advisory_service
    _advisory_service = None
