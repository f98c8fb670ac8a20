"""Data provider implementations."""

from src.core.interfaces.data_provider import IDataProvider
from src.infrastructure.providers.demo_provider import DemoDataProvider
from src.infrastructure.providers.factory import get_data_provider
from src.infrastructure.providers.rest_provider import RestDataProvider

__all__ = [
    "IDataProvider",
    "DemoDataProvider",
    "RestDataProvider",
    "get_data_provider",
]
