"""SQLAlchemy model for the group_members junction table.

Implements the many-to-many relationship between study groups and users.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from studysync.infrastructure.persistence.database import Base, utc_now


class GroupMemberModel(Base):
    """Junction table recording that a user is a member of a group.

    Attributes:
        group_id: Foreign key to groups table.
        user_id: Foreign key to users table.
        joined_at: When the user joined.
    """

    __tablename__ = "group_members"

    group_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("groups.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<GroupMember(group_id={self.group_id}, user_id={self.user_id})>"
