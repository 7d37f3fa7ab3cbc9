"""Task status values."""

from enum import Enum


class TaskStatus(str, Enum):
    """Lifecycle states of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"
