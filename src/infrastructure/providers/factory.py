"""Data provider factory."""

from src.config import get_logger, get_settings
from src.core.exceptions import ConfigurationError
from src.core.interfaces.data_provider import IDataProvider

logger = get_logger(__name__)


def get_data_provider(mode: str | None = None) -> IDataProvider:
    """
    Create a data provider.

    Args:
        mode: "demo" or "remote" (default from settings)

    Raises:
        ConfigurationError: Unknown mode
    """
    settings = get_settings()
    mode = mode or settings.data.mode

    if mode == "demo":
        from src.infrastructure.providers.demo_provider import DemoDataProvider

        return DemoDataProvider(seed=settings.data.demo_seed)

    if mode == "remote":
        from src.infrastructure.providers.rest_provider import RestDataProvider

        logger.info("remote_provider_selected", api_url=settings.data.api_url)
        return RestDataProvider(settings.data)

    raise ConfigurationError("DATA_MODE", mode)
