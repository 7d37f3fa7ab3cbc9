"""Domain services: the registries and the authorization guard."""

from studysync.domain.services.credential_service import CredentialService
from studysync.domain.services.group_service import GroupService
from studysync.domain.services.join_code_generator import (
    JoinCodeExhaustedError,
    JoinCodeGenerator,
)
from studysync.domain.services.task_service import TaskService

__all__ = [
    "CredentialService",
    "GroupService",
    "JoinCodeExhaustedError",
    "JoinCodeGenerator",
    "TaskService",
]
