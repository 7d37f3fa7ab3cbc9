"""Group registry: study groups, membership and join codes.

Every operation takes the acting user's id explicitly (``None`` for an
anonymous caller) and consults the authorization guard before touching
state.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studysync.core.logging import get_logger
from studysync.domain.exceptions import (
    AlreadyMemberError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from studysync.domain.services import authorization_guard as guard
from studysync.domain.services.identifiers import is_valid_id, new_id
from studysync.domain.services.join_code_generator import JoinCodeGenerator
from studysync.infrastructure.persistence.models import GroupModel
from studysync.infrastructure.persistence.repositories import GroupRepository

logger = get_logger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "description", "is_private"})


class GroupService:
    """Service for study group business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.group_repo = GroupRepository(session)

    async def create_group(
        self,
        user_id: str,
        name: str,
        description: str | None = None,
        is_private: bool = True,
    ) -> GroupModel:
        """Create a group with ``user_id`` as creator and sole member.

        Private groups are given a fresh join code.

        Raises:
            ValidationError: If the name is empty.
            ConflictError: If the name is taken.
        """
        name = name.strip() if name else ""
        if not name:
            raise ValidationError("Group name is required.")

        if await self.group_repo.get_by_name(name) is not None:
            raise ConflictError("A group with that name already exists.", field="name")

        group = GroupModel(
            id=new_id(),
            name=name,
            description=description,
            creator_id=user_id,
            is_private=is_private,
            join_code=await self._new_join_code() if is_private else None,
        )
        try:
            await self.group_repo.create(group)
            await self.group_repo.add_member(group.id, user_id)
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Group name already in use.", field="name") from e

        logger.info(
            "Group created",
            group_id=group.id,
            user_id=user_id,
            is_private=is_private,
        )
        return await self._reload(group.id)

    async def list_groups(self, user_id: str | None = None) -> list[GroupModel]:
        """List the groups visible to ``user_id``, newest first.

        Anonymous callers see public groups only; authenticated callers
        also see every group they belong to.
        """
        return await self.group_repo.list_visible(user_id)

    async def get_group(self, group_id: str, user_id: str | None = None) -> GroupModel:
        """Get a group if the caller may see it.

        Raises:
            ValidationError: If ``group_id`` is malformed.
            NotFoundError: If the group does not exist.
            ForbiddenError: If the group is private and the caller is not a member.
        """
        group = await self._load(group_id)
        if not guard.can_view_group(group, user_id):
            logger.info("Private group access denied", group_id=group_id, user_id=user_id)
            raise ForbiddenError("Not authorized to access this private group.")
        return group

    async def join_group(
        self,
        group_id: str,
        user_id: str,
        join_code: str | None = None,
    ) -> GroupModel:
        """Add the caller to a group.

        Private groups require an exact join-code match.

        Raises:
            NotFoundError: If the group does not exist.
            AlreadyMemberError: If the caller is already a member.
            ForbiddenError: If the join code is missing or wrong.
        """
        group = await self._load(group_id)

        if guard.is_member(group, user_id):
            raise AlreadyMemberError()

        if group.is_private and (not join_code or join_code != group.join_code):
            logger.info("Join rejected: invalid join code", group_id=group_id, user_id=user_id)
            raise ForbiddenError("Invalid join code for this private group.")

        await self.group_repo.add_member(group.id, user_id)
        logger.info("User joined group", group_id=group_id, user_id=user_id)
        return await self._reload(group.id)

    async def leave_group(self, group_id: str, user_id: str) -> GroupModel:
        """Remove the caller from a group's members.

        Raises:
            NotFoundError: If the group does not exist.
            ForbiddenError: If the caller is the creator and the only member.
            ValidationError: If the caller is not a member.
        """
        group = await self._load(group_id)

        if guard.is_group_creator(group, user_id) and len(group.member_ids) == 1:
            raise ForbiddenError(
                "As the sole creator and member, you cannot leave. Delete the group instead."
            )

        if not guard.is_member(group, user_id):
            raise ValidationError("You are not a member of this group.")

        await self.group_repo.remove_member(group.id, user_id)
        logger.info("User left group", group_id=group_id, user_id=user_id)
        return await self._reload(group.id)

    async def update_group(
        self,
        group_id: str,
        user_id: str,
        fields: dict[str, Any],
    ) -> GroupModel:
        """Apply a partial update. Only the creator may update.

        Keys absent from ``fields`` are left untouched; an empty name is
        ignored. Switching to private draws a new join code, switching to
        public clears it.

        Raises:
            NotFoundError: If the group does not exist.
            ForbiddenError: If the caller is not the creator.
            ConflictError: If the new name is taken.
        """
        group = await self._load(group_id)

        if not guard.can_manage_group(group, user_id):
            raise ForbiddenError("Not authorized to update this group.")

        changes = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}

        name = (changes.get("name") or "").strip()
        if name and name != group.name:
            if await self.group_repo.get_by_name(name) is not None:
                raise ConflictError("Group name already in use.", field="name")
            group.name = name

        if "description" in changes:
            group.description = changes["description"]

        if changes.get("is_private") is not None:
            group.is_private = bool(changes["is_private"])

        if not group.is_private:
            group.join_code = None
        elif not group.join_code:
            group.join_code = await self._new_join_code()

        try:
            await self.group_repo.update(group)
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Group name already in use.", field="name") from e

        logger.info("Group updated", group_id=group_id, fields=sorted(changes))
        return await self._reload(group.id)

    async def delete_group(self, group_id: str, user_id: str) -> None:
        """Delete a group. Only the creator may delete.

        The group's tasks are left in place.

        Raises:
            NotFoundError: If the group does not exist.
            ForbiddenError: If the caller is not the creator.
        """
        group = await self._load(group_id)

        if not guard.can_manage_group(group, user_id):
            raise ForbiddenError("Not authorized to delete this group.")

        await self.group_repo.delete(group)
        logger.info("Group deleted", group_id=group_id, user_id=user_id)

    async def _load(self, group_id: str) -> GroupModel:
        if not is_valid_id(group_id):
            raise ValidationError("Invalid group ID format.")
        group = await self.group_repo.get_by_id(group_id)
        if group is None:
            raise NotFoundError("Study group not found.")
        return group

    async def _reload(self, group_id: str) -> GroupModel:
        group = await self.group_repo.get_by_id(group_id)
        if group is None:
            raise NotFoundError("Study group not found.")
        return group

    async def _new_join_code(self) -> str:
        existing = await self.group_repo.get_all_join_codes()
        return JoinCodeGenerator.generate(existing)
