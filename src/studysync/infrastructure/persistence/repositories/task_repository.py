"""Repository for task database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studysync.infrastructure.persistence.models import TaskModel


class TaskRepository:
    """Repository for task database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, task: TaskModel) -> TaskModel:
        """Create a new task.

        Args:
            task: Task model to create.

        Returns:
            Created task model.
        """
        self.session.add(task)
        await self.session.flush()
        return task

    async def get_by_id(self, task_id: str) -> TaskModel | None:
        """Get a task by ID with creator and assignee loaded.

        Re-reads the row so relationships reflect the latest foreign keys.
        """
        result = await self.session.execute(
            select(TaskModel)
            .where(TaskModel.id == task_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_by_group(self, group_id: str) -> list[TaskModel]:
        """List a group's tasks.

        Ordered by due date ascending with undated tasks last; ties are
        broken newest-created first.
        """
        result = await self.session.execute(
            select(TaskModel)
            .where(TaskModel.group_id == group_id)
            .order_by(
                TaskModel.due_date.is_(None),
                TaskModel.due_date.asc(),
                TaskModel.created_at.desc(),
            )
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def update(self, task: TaskModel) -> TaskModel:
        """Flush pending changes to a task."""
        if task not in self.session:
            self.session.add(task)
        await self.session.flush()
        return task

    async def delete(self, task: TaskModel) -> None:
        """Delete a task."""
        await self.session.delete(task)
        await self.session.flush()
