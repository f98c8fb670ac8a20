"""Abstract interface for the inventory data source."""

from abc import ABC, abstractmethod
from typing import Any

from src.core.entities.inventory import InventoryRecord, ProjectProgress, Transaction
from src.core.entities.item import Item
from src.core.entities.movement import MovementRequest
from src.core.entities.site import Site
from src.core.entities.tool import Tool
from src.core.entities.user import User


class IDataProvider(ABC):
    """
    Source of reference data and inventory snapshots.

    Implementations: DemoDataProvider (generated dataset), RestDataProvider
    (remote backend). Errors are raised as DataProviderError subclasses.
    """

    name: str = "provider"

    @abstractmethod
    async def login(self, username: str, password: str) -> User:
        """
        Authenticate a user.

        Raises:
            AuthenticationError: Unknown user or wrong password.
            ProviderConnectionError: Backend unreachable.
        """
        pass

    @abstractmethod
    async def get_sites(self) -> list[Site]:
        pass

    @abstractmethod
    async def get_items(self) -> list[Item]:
        pass

    @abstractmethod
    async def get_inventory(self) -> list[InventoryRecord]:
        pass

    @abstractmethod
    async def get_tools(self) -> list[Tool]:
        pass

    @abstractmethod
    async def get_movements(self) -> list[MovementRequest]:
        pass

    @abstractmethod
    async def get_transactions(self) -> list[Transaction]:
        pass

    @abstractmethod
    async def get_progress(self) -> list[ProjectProgress]:
        """Installed quantities reported by project sites."""
        pass

    @abstractmethod
    async def get_users(self) -> list[User]:
        pass

    @abstractmethod
    async def create_user(self, payload: dict[str, Any]) -> User:
        """Create a user from a username / name / role / password payload."""
        pass

    async def close(self) -> None:
        """Release network resources. No-op by default."""
        return None
