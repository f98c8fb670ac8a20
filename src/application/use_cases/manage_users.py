"""User management use cases."""

from src.application.dto.requests import CreateUserRequest
from src.application.dto.responses import UserListResponse
from src.application.session import DashboardSession
from src.config import get_logger
from src.core.entities.user import User

logger = get_logger(__name__)


class ListUsersUseCase:
    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(self) -> UserListResponse:
        snapshot = await self._session.current()
        return UserListResponse(users=snapshot.users, total=len(snapshot.users))


class CreateUserUseCase:
    """Create a user through the provider and reload the snapshot."""

    def __init__(self, session: DashboardSession):
        self._session = session

    async def execute(self, request: CreateUserRequest) -> User:
        if request.assigned_site_id:
            await self._session.current()
            self._session.catalog.require_site(request.assigned_site_id)

        payload = request.model_dump(by_alias=True, mode="json")
        user = await self._session.provider.create_user(payload)
        await self._session.refresh()

        logger.info("user_created", user_id=user.id, role=user.role.value)
        return user
