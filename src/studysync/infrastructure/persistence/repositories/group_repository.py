"""Repository for study group database operations."""

from __future__ import annotations

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from studysync.infrastructure.persistence.models import GroupMemberModel, GroupModel


class GroupRepository:
    """Repository for group and membership database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, group: GroupModel) -> GroupModel:
        """Create a new group.

        Args:
            group: Group model to create.

        Returns:
            Created group model.
        """
        self.session.add(group)
        await self.session.flush()
        return group

    async def get_by_id(self, group_id: str) -> GroupModel | None:
        """Get a group by ID with creator and members loaded.

        Always re-reads the row so membership changes made through the
        junction table are reflected on an already-loaded instance.
        """
        result = await self.session.execute(
            select(GroupModel)
            .where(GroupModel.id == group_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> GroupModel | None:
        """Get a group by its (unique) name."""
        result = await self.session.execute(
            select(GroupModel).where(GroupModel.name == name)
        )
        return result.scalar_one_or_none()

    async def get_all_join_codes(self) -> list[str]:
        """Get every join code currently in use."""
        result = await self.session.execute(
            select(GroupModel.join_code).where(GroupModel.join_code.is_not(None))
        )
        return list(result.scalars().all())

    async def list_visible(self, user_id: str | None = None) -> list[GroupModel]:
        """List public groups plus, if given, the groups ``user_id`` belongs to.

        Newest groups come first.
        """
        condition = GroupModel.is_private.is_(False)
        if user_id is not None:
            member_of = select(GroupMemberModel.group_id).where(
                GroupMemberModel.user_id == user_id
            )
            condition = or_(condition, GroupModel.id.in_(member_of))

        result = await self.session.execute(
            select(GroupModel)
            .where(condition)
            .order_by(GroupModel.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def update(self, group: GroupModel) -> GroupModel:
        """Flush pending changes to a group."""
        if group not in self.session:
            self.session.add(group)
        await self.session.flush()
        return group

    async def delete(self, group: GroupModel) -> None:
        """Delete a group and its membership rows."""
        await self.session.delete(group)
        await self.session.flush()

    async def add_member(self, group_id: str, user_id: str) -> None:
        """Add a user to a group's member list."""
        self.session.add(GroupMemberModel(group_id=group_id, user_id=user_id))
        await self.session.flush()

    async def remove_member(self, group_id: str, user_id: str) -> None:
        """Remove a user from a group's member list."""
        await self.session.execute(
            delete(GroupMemberModel).where(
                (GroupMemberModel.group_id == group_id)
                & (GroupMemberModel.user_id == user_id)
            )
        )
        await self.session.flush()
