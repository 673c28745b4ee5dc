from warden.presentation.api.routers.admin import router as admin_router
from warden.presentation.api.routers.auth import router as auth_router
from warden.presentation.api.routers.sessions import router as sessions_router
from warden.presentation.api.routers.users import router as users_router

__all__ = [
    "admin_router",
    "auth_router",
    "sessions_router",
    "users_router",
]
