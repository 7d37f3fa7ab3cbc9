"""Domain entities and value types for StudySync."""

from studysync.domain.entities.task_status import TaskStatus

__all__ = ["TaskStatus"]
