"""Persistence repositories for database operations."""

from studysync.infrastructure.persistence.repositories.group_repository import (
    GroupRepository,
)
from studysync.infrastructure.persistence.repositories.task_repository import (
    TaskRepository,
)
from studysync.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "GroupRepository",
    "TaskRepository",
    "UserRepository",
]
