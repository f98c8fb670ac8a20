"""User management endpoints."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_create_user_use_case, get_list_users_use_case
from src.application.dto.requests import CreateUserRequest
from src.application.dto.responses import ErrorResponse, UserListResponse
from src.application.use_cases import CreateUserUseCase, ListUsersUseCase
from src.core.entities.user import User

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
) -> UserListResponse:
    return await use_case.execute()


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_user(
    request: CreateUserRequest,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
) -> User:
    """Create a user. Site managers should carry an assigned site."""
    return await use_case.execute(request)
