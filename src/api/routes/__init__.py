"""API route modules."""

from src.api.routes.advisory import router as advisory_router
from src.api.routes.auth import router as auth_router
from src.api.routes.dashboard import router as dashboard_router
from src.api.routes.health import router as health_router
from src.api.routes.inventory import router as inventory_router
from src.api.routes.movements import router as movements_router
from src.api.routes.projects import router as projects_router
from src.api.routes.purchasing import router as purchasing_router
from src.api.routes.tools import router as tools_router
from src.api.routes.users import router as users_router

__all__ = [
    "health_router",
    "auth_router",
    "dashboard_router",
    "inventory_router",
    "tools_router",
    "movements_router",
    "projects_router",
    "purchasing_router",
    "advisory_router",
    "users_router",
]
