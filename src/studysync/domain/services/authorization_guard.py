"""Authorization guard for study groups and tasks.

Pure predicates over already-loaded records. The group and task services
consult these before every read or write; nothing here touches the
database or mutates state.

There is no role hierarchy: the group creator is the only elevated
principal ("admin" of the group).
"""

from typing import Protocol


class GroupLike(Protocol):
    """Shape of a group record as seen by the guard."""

    creator_id: str
    is_private: bool

    @property
    def member_ids(self) -> list[str]: ...


class TaskLike(Protocol):
    """Shape of a task record as seen by the guard."""

    created_by_id: str
    assigned_to_id: str | None


def is_member(group: GroupLike, user_id: str | None) -> bool:
    """Return True if ``user_id`` is in the group's member list."""
    if user_id is None:
        return False
    return any(member_id == user_id for member_id in group.member_ids)


def is_group_creator(group: GroupLike, user_id: str | None) -> bool:
    """Return True if ``user_id`` created the group."""
    return user_id is not None and group.creator_id == user_id


def is_task_creator(task: TaskLike, user_id: str | None) -> bool:
    """Return True if ``user_id`` created the task."""
    return user_id is not None and task.created_by_id == user_id


def is_assignee(task: TaskLike, user_id: str | None) -> bool:
    """Return True if the task is assigned to ``user_id``."""
    return user_id is not None and task.assigned_to_id == user_id


def can_view_group(group: GroupLike, user_id: str | None) -> bool:
    """Public groups are visible to anyone, private ones to members only."""
    if not group.is_private:
        return True
    return is_member(group, user_id)


def can_manage_group(group: GroupLike, user_id: str | None) -> bool:
    """Only the creator may update or delete a group."""
    return is_group_creator(group, user_id)


def can_update_task(group: GroupLike, task: TaskLike, user_id: str | None) -> bool:
    """Task creator, assignee or group creator may update a task."""
    return (
        is_task_creator(task, user_id)
        or is_assignee(task, user_id)
        or is_group_creator(group, user_id)
    )


def can_delete_task(group: GroupLike, task: TaskLike, user_id: str | None) -> bool:
    """Only the task creator or group creator may delete a task.

    Narrower than :func:`can_update_task`: an assignee alone cannot delete.
    """
    return is_task_creator(task, user_id) or is_group_creator(group, user_id)
