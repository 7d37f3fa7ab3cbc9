"""Router for group-scoped tasks.

Mounted under ``/groups/{group_id}/tasks``.
"""

from fastapi import APIRouter, status

from studysync.domain.services import TaskService
from studysync.infrastructure.api.dependencies import AuthenticatedUser, DBSession
from studysync.infrastructure.api.schemas import (
    MessageResponse,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)
from studysync.infrastructure.persistence.models import TaskModel

router = APIRouter(tags=["Tasks"])


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
async def create_task(
    group_id: str,
    task_data: TaskCreate,
    current_user: AuthenticatedUser,
    session: DBSession,
) -> TaskModel:
    """Create a task in a group. Any member may create tasks."""
    task = await TaskService(session).create_task(
        group_id,
        current_user.user_id,
        title=task_data.title,
        description=task_data.description,
        due_date=task_data.due_date,
        assigned_to=task_data.assigned_to,
        status=task_data.status,
    )
    await session.commit()
    return task


@router.get("", response_model=list[TaskResponse], summary="List tasks")
async def list_tasks(
    group_id: str,
    current_user: AuthenticatedUser,
    session: DBSession,
) -> list[TaskModel]:
    """List a group's tasks, soonest due first."""
    return await TaskService(session).list_tasks(group_id, current_user.user_id)


@router.get("/{task_id}", response_model=TaskResponse, summary="Get a task")
async def get_task(
    group_id: str,
    task_id: str,
    current_user: AuthenticatedUser,
    session: DBSession,
) -> TaskModel:
    return await TaskService(session).get_task(group_id, task_id, current_user.user_id)


@router.put("/{task_id}", response_model=TaskResponse, summary="Update a task")
async def update_task(
    group_id: str,
    task_id: str,
    task_data: TaskUpdate,
    current_user: AuthenticatedUser,
    session: DBSession,
) -> TaskModel:
    """Update a task. Allowed for its creator, its assignee and the group creator."""
    task = await TaskService(session).update_task(
        group_id,
        task_id,
        current_user.user_id,
        task_data.model_dump(exclude_unset=True),
    )
    await session.commit()
    return task


@router.delete("/{task_id}", response_model=MessageResponse, summary="Delete a task")
async def delete_task(
    group_id: str,
    task_id: str,
    current_user: AuthenticatedUser,
    session: DBSession,
) -> MessageResponse:
    """Delete a task. Allowed for its creator and the group creator."""
    await TaskService(session).delete_task(group_id, task_id, current_user.user_id)
    await session.commit()
    return MessageResponse(message="Task deleted successfully.")
