"""
REST data provider.

Reads snapshots from the production backend over HTTP and classifies every
failure: unreachable backend, rejected credentials, or a bad answer.
"""

from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.config import DataSettings, get_logger, get_settings
from src.core.entities.inventory import InventoryRecord, ProjectProgress, Transaction
from src.core.entities.item import Item
from src.core.entities.movement import MovementRequest
from src.core.entities.site import Site
from src.core.entities.tool import Tool
from src.core.entities.user import User
from src.core.exceptions import (
    AuthenticationError,
    ProviderConnectionError,
    ProviderResponseError,
)
from src.core.interfaces.data_provider import IDataProvider

logger = get_logger(__name__)

T = TypeVar("T")

HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}

# Status codes the login endpoint uses for bad credentials or unknown users
LOGIN_REJECTED = {400, 401, 403, 404}


class RestDataProvider(IDataProvider):
    """httpx-based client for the inventory backend."""

    name = "remote"

    def __init__(
        self,
        settings: DataSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings().data
        self.base_url = self.settings.api_url
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=HEADERS,
            timeout=self.settings.timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.warning("provider_timeout", url=url)
            raise ProviderConnectionError(url, "timed out") from e
        except httpx.TransportError as e:
            logger.warning("provider_connection_failed", url=url, error=str(e))
            raise ProviderConnectionError(url, type(e).__name__) from e

        if response.status_code in (401, 403):
            raise AuthenticationError()
        if response.status_code >= 400:
            logger.warning("provider_http_error", url=url, status_code=response.status_code)
            raise ProviderResponseError(
                path, response.status_code, response.text or response.reason_phrase
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderResponseError(path, response.status_code, "Body is not JSON") from e

    def _validate(self, path: str, adapter: TypeAdapter[T], data: Any) -> T:
        try:
            return adapter.validate_python(data)
        except PydanticValidationError as e:
            first = e.errors()[0]
            where = ".".join(str(loc) for loc in first["loc"])
            raise ProviderResponseError(path, 200, f"Invalid payload at '{where}': {first['msg']}") from e

    async def _get_list(self, path: str, model: type[T]) -> list[T]:
        data = await self._request("GET", path)
        result = self._validate(path, TypeAdapter(list[model]), data)
        logger.debug("provider_fetched", path=path, count=len(result))
        return result

    async def login(self, username: str, password: str) -> User:
        try:
            data = await self._request(
                "POST", "/login", json={"username": username, "password": password}
            )
        except AuthenticationError:
            raise AuthenticationError(username)
        except ProviderResponseError as e:
            if e.details.get("status_code") in LOGIN_REJECTED:
                raise AuthenticationError(username) from e
            raise

        user = self._validate("/login", TypeAdapter(User), data)
        logger.info("remote_login", username=user.username, role=user.role.value)
        return user

    async def get_sites(self) -> list[Site]:
        return await self._get_list("/sites", Site)

    async def get_items(self) -> list[Item]:
        return await self._get_list("/items", Item)

    async def get_inventory(self) -> list[InventoryRecord]:
        return await self._get_list("/inventory", InventoryRecord)

    async def get_tools(self) -> list[Tool]:
        return await self._get_list("/tools", Tool)

    async def get_movements(self) -> list[MovementRequest]:
        return await self._get_list("/movements", MovementRequest)

    async def get_transactions(self) -> list[Transaction]:
        return await self._get_list("/transactions", Transaction)

    async def get_progress(self) -> list[ProjectProgress]:
        return await self._get_list("/project-progress", ProjectProgress)

    async def get_users(self) -> list[User]:
        return await self._get_list("/users", User)

    async def create_user(self, payload: dict[str, Any]) -> User:
        data = await self._request("POST", "/users", json=payload)
        user = self._validate("/users", TypeAdapter(User), data)
        logger.info("remote_user_created", user_id=user.id)
        return user
