"""LLM provider factory."""

from typing import Any

from src.config import get_logger, get_settings
from src.core.exceptions import ConfigurationError
from src.core.interfaces import ILLMProvider

logger = get_logger(__name__)


def get_llm_provider(provider_type: str | None = None) -> ILLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_type: Provider name (default from settings)

    Raises:
        ConfigurationError: Unknown provider name
    """
    provider_type = provider_type or get_settings().llm.provider

    if provider_type == "ollama":
        from src.infrastructure.llm.ollama import get_ollama_provider

        return get_ollama_provider()

    raise ConfigurationError("LLM_PROVIDER", provider_type)


async def check_llm_health(provider: ILLMProvider | None = None) -> dict[str, Any]:
    """Health of the configured LLM provider as a plain dict."""
    provider = provider or get_llm_provider()
    health = await provider.check_health()
    if not health.available:
        logger.info("llm_unavailable", provider=health.provider, error=health.error)
    return dict(health.__dict__)
