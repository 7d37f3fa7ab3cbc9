"""API Routes for StudySync."""

from studysync.infrastructure.api.routes.auth_router import router as auth_router
from .groups_router import router as groups_router
from .tasks_router import router as tasks_router
from .users_router import router as users_router

__all__ = [
    "auth_router",
    "groups_router",
    "tasks_router",
    "users_router",
]
