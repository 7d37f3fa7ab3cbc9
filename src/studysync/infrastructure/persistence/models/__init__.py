"""SQLAlchemy models for StudySync.

All models inherit from the Base class defined in database.py.
"""

from studysync.infrastructure.persistence.models.group import GroupModel
from studysync.infrastructure.persistence.models.group_member import GroupMemberModel
from studysync.infrastructure.persistence.models.task import TaskModel
from studysync.infrastructure.persistence.models.user import UserModel

__all__ = [
    "GroupMemberModel",
    "GroupModel",
    "TaskModel",
    "UserModel",
]
