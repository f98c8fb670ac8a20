"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.data_provider import IDataProvider
from src.core.interfaces.llm import (
    HealthStatus,
    ILLMProvider,
    LLMProvider,
    LLMResponse,
)

__all__ = [
    # Data
    "IDataProvider",
    # LLM
    "ILLMProvider",
    "LLMProvider",
    "LLMResponse",
    "HealthStatus",
]
