"""Task registry: group-scoped task CRUD.

Every operation checks, in order: the group exists, the caller is a
member, the task exists, the task belongs to the group, and finally the
action-specific permission from the authorization guard.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from studysync.core.logging import get_logger
from studysync.domain.entities import TaskStatus
from studysync.domain.exceptions import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from studysync.domain.services import authorization_guard as guard
from studysync.domain.services.identifiers import is_valid_id, new_id
from studysync.infrastructure.persistence.models import GroupModel, TaskModel
from studysync.infrastructure.persistence.repositories import (
    GroupRepository,
    TaskRepository,
)

logger = get_logger(__name__)


def normalize_due_date(value: datetime | None) -> datetime | None:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_status(value: str | TaskStatus) -> str:
    """Return the stored form of a task status.

    Raises:
        ValidationError: If ``value`` is not a known status.
    """
    try:
        return TaskStatus(value).value
    except ValueError as e:
        allowed = ", ".join(status.value for status in TaskStatus)
        raise ValidationError(
            f"Invalid status '{value}'. Must be one of: {allowed}."
        ) from e


class TaskService:
    """Service for task business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.group_repo = GroupRepository(session)
        self.task_repo = TaskRepository(session)

    async def create_task(
        self,
        group_id: str,
        user_id: str,
        title: str,
        description: str | None = None,
        due_date: datetime | None = None,
        assigned_to: str | None = None,
        status: str | TaskStatus = TaskStatus.PENDING,
    ) -> TaskModel:
        """Create a task in a group. Any member may create tasks.

        Raises:
            NotFoundError: If the group does not exist.
            ForbiddenError: If the caller is not a member.
            ValidationError: If the title is empty, the status is unknown, or
                the assignee is malformed or not a member.
        """
        group = await self._load_group(group_id)
        if not guard.is_member(group, user_id):
            logger.info("Task creation denied", group_id=group_id, user_id=user_id)
            raise ForbiddenError("Not authorized to create tasks in this group.")

        title = title.strip() if title else ""
        if not title:
            raise ValidationError("Task title is required.")

        task = TaskModel(
            id=new_id(),
            title=title,
            description=description,
            due_date=normalize_due_date(due_date),
            status=parse_status(status),
            group_id=group.id,
            created_by_id=user_id,
            # An empty assignee on create means unassigned.
            assigned_to_id=self._check_assignee(group, assigned_to or None),
        )
        await self.task_repo.create(task)

        logger.info(
            "Task created",
            task_id=task.id,
            group_id=group.id,
            user_id=user_id,
            assigned_to=task.assigned_to_id,
        )
        return await self._reload(task.id)

    async def list_tasks(self, group_id: str, user_id: str) -> list[TaskModel]:
        """List a group's tasks for a member.

        Raises:
            NotFoundError: If the group does not exist.
            ForbiddenError: If the caller is not a member.
        """
        group = await self._load_group(group_id)
        if not guard.is_member(group, user_id):
            raise ForbiddenError("Not authorized to view tasks in this group.")
        return await self.task_repo.list_by_group(group.id)

    async def get_task(self, group_id: str, task_id: str, user_id: str) -> TaskModel:
        """Get one task of a group for a member."""
        _, task = await self._load_scoped(
            group_id, task_id, user_id, "Not authorized to view tasks in this group."
        )
        return task

    async def update_task(
        self,
        group_id: str,
        task_id: str,
        user_id: str,
        fields: dict[str, Any],
    ) -> TaskModel:
        """Apply a partial update to a task.

        Only keys present in ``fields`` are considered. An empty title and a
        ``None`` due date are ignored; ``assigned_to=None`` clears the
        assignee.

        Raises:
            NotFoundError: If the group or task does not exist.
            ForbiddenError: If the caller may not update this task.
            ValidationError: If the task is in another group, the status is
                unknown, or the assignee is malformed or not a member.
        """
        group, task = await self._load_scoped(
            group_id, task_id, user_id, "Not authorized to update tasks in this group."
        )
        if not guard.can_update_task(group, task, user_id):
            logger.info("Task update denied", task_id=task_id, user_id=user_id)
            raise ForbiddenError("Not authorized to update this task.")

        title = (fields.get("title") or "").strip()
        if title:
            task.title = title

        if "description" in fields:
            task.description = fields["description"]

        if fields.get("due_date") is not None:
            task.due_date = normalize_due_date(fields["due_date"])

        if fields.get("status") is not None:
            task.status = parse_status(fields["status"])

        if "assigned_to" in fields:
            task.assigned_to_id = self._check_assignee(group, fields["assigned_to"])

        await self.task_repo.update(task)
        logger.info(
            "Task updated",
            task_id=task.id,
            group_id=group.id,
            user_id=user_id,
            fields=sorted(fields),
        )
        return await self._reload(task.id)

    async def delete_task(self, group_id: str, task_id: str, user_id: str) -> None:
        """Delete a task. Only the task creator or group creator may delete."""
        group, task = await self._load_scoped(
            group_id, task_id, user_id, "Not authorized to delete tasks in this group."
        )
        if not guard.can_delete_task(group, task, user_id):
            logger.info("Task deletion denied", task_id=task_id, user_id=user_id)
            raise ForbiddenError("Not authorized to delete this task.")

        await self.task_repo.delete(task)
        logger.info("Task deleted", task_id=task_id, group_id=group.id, user_id=user_id)

    async def _load_group(self, group_id: str) -> GroupModel:
        if not is_valid_id(group_id):
            raise ValidationError("Invalid group ID format.")
        group = await self.group_repo.get_by_id(group_id)
        if group is None:
            raise NotFoundError("Study group not found.")
        return group

    async def _load_scoped(
        self,
        group_id: str,
        task_id: str,
        user_id: str,
        membership_message: str,
    ) -> tuple[GroupModel, TaskModel]:
        group = await self._load_group(group_id)
        if not guard.is_member(group, user_id):
            raise ForbiddenError(membership_message)

        if not is_valid_id(task_id):
            raise ValidationError("Invalid task ID format.")
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found.")
        if task.group_id != group.id:
            raise ValidationError("Task does not belong to the specified group.")
        return group, task

    async def _reload(self, task_id: str) -> TaskModel:
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found.")
        return task

    @staticmethod
    def _check_assignee(group: GroupModel, assigned_to: str | None) -> str | None:
        if assigned_to is None:
            return None
        if not is_valid_id(assigned_to):
            raise ValidationError("Invalid assignedTo user ID format.")
        if not guard.is_member(group, assigned_to):
            raise ValidationError(f"Assigned user {assigned_to} is not a member of this group.")
        return assigned_to
