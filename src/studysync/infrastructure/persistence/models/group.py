"""SQLAlchemy model for the groups table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studysync.infrastructure.persistence.database import Base, utc_now


class GroupModel(Base):
    """SQLAlchemy model for the groups table.

    A private group carries a join code; a public group never does.

    Attributes:
        id: Primary key (UUID string).
        name: Globally unique group name.
        description: Optional description.
        creator_id: Foreign key to the user who created the group.
        join_code: 8-character code required to join a private group.
        is_private: Whether joining requires the join code.
        created_at: Timestamp when the group was created.
        updated_at: Timestamp when the group was last updated.
    """

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Group ID (UUID)",
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Group name",
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    creator_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    join_code: Mapped[str | None] = mapped_column(
        String(10),
        nullable=True,
        unique=True,
        comment="Join code for private groups",
    )
    is_private: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utc_now,
        index=True,
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
        lazy="selectin",
    )
    members: Mapped[list["UserModel"]] = relationship(  # noqa: F821
        "UserModel",
        secondary="group_members",
        order_by="GroupMemberModel.joined_at",
        lazy="selectin",
    )

    @property
    def member_ids(self) -> list[str]:
        """Ids of the group's members, in join order."""
        return [member.id for member in self.members]

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name}, is_private={self.is_private})>"
