"""Configuration module."""

from src.config.logging import (
    bind_session_context,
    clear_session_context,
    configure_logging,
    get_logger,
)
from src.config.settings import (
    APISettings,
    DataSettings,
    KPISettings,
    LLMSettings,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "DataSettings",
    "KPISettings",
    "LLMSettings",
    "APISettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "bind_session_context",
    "clear_session_context",
    "get_logger",
]
