"""API Schemas for request/response validation."""

from studysync.infrastructure.api.schemas.auth_schemas import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
    ValidationErrorDetail,
)
from studysync.infrastructure.api.schemas.group_schemas import (
    GroupActionResponse,
    GroupCreate,
    GroupResponse,
    GroupUpdate,
    JoinRequest,
    MessageResponse,
    UserSummary,
)
from studysync.infrastructure.api.schemas.task_schemas import (
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)

__all__ = [
    "AuthResponse",
    "ErrorResponse",
    "GroupActionResponse",
    "GroupCreate",
    "GroupResponse",
    "GroupUpdate",
    "JoinRequest",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "TaskCreate",
    "TaskResponse",
    "TaskUpdate",
    "UserResponse",
    "UserSummary",
    "ValidationErrorDetail",
]
