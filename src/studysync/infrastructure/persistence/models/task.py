"""SQLAlchemy model for the tasks table."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studysync.domain.entities import TaskStatus
from studysync.infrastructure.persistence.database import Base, utc_now


class TaskModel(Base):
    """SQLAlchemy model for the tasks table.

    ``group_id`` is a plain indexed reference rather than a foreign key:
    deleting a group leaves its tasks in place, unreachable through the
    group-scoped API.

    Attributes:
        id: Primary key (UUID string).
        title: Task title.
        description: Optional free-form description.
        due_date: Optional due date (naive UTC).
        status: One of the TaskStatus values.
        group_id: Id of the owning group; never changes after creation.
        created_by_id: Foreign key to the user who created the task.
        assigned_to_id: Optional foreign key to the assigned user.
        created_at: Timestamp when the task was created.
        updated_at: Timestamp when the task was last updated.
    """

    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Task ID (UUID)",
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TaskStatus.PENDING.value,
    )
    group_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        comment="Owning group ID",
    )
    created_by_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
    )
    assigned_to_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    # Relationships
    creator: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        foreign_keys=[created_by_id],
        lazy="selectin",
    )
    assignee: Mapped[Optional["UserModel"]] = relationship(  # noqa: F821
        "UserModel",
        foreign_keys=[assigned_to_id],
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_tasks_group_status", "group_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title={self.title}, group_id={self.group_id})>"
