"""Dashboard user entity."""

from enum import Enum

from src.core.entities.common import DomainModel


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    DIRECTOR = "DIRECTOR"
    SITE_MANAGER = "SITE_MANAGER"
    PURCHASING = "PURCHASING"


class User(DomainModel):
    """A dashboard user. Site managers are bound to one site."""

    id: str
    username: str
    name: str
    role: UserRole
    assigned_site_id: str | None = None

    @property
    def can_approve(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.DIRECTOR)
