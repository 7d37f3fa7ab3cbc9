"""Router for study group management."""

from fastapi import APIRouter, status

from studysync.core.logging import get_logger
from studysync.domain.services import GroupService
from studysync.infrastructure.api.dependencies import (
    AuthenticatedUser,
    DBSession,
    OptionalUser,
)
from studysync.infrastructure.api.schemas import (
    ErrorResponse,
    GroupActionResponse,
    GroupCreate,
    GroupResponse,
    GroupUpdate,
    JoinRequest,
    MessageResponse,
)
from studysync.infrastructure.persistence.models import GroupModel

router = APIRouter(tags=["Groups"])
logger = get_logger(__name__)


@router.post(
    "",
    response_model=GroupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new group",
    responses={409: {"model": ErrorResponse, "description": "Name already taken"}},
)
async def create_group(
    group_data: GroupCreate,
    current_user: AuthenticatedUser,
    session: DBSession,
) -> GroupModel:
    """Create a group with the caller as creator and first member."""
    group = await GroupService(session).create_group(
        user_id=current_user.user_id,
        name=group_data.name,
        description=group_data.description,
        is_private=group_data.is_private,
    )
    await session.commit()
    return group


@router.get(
    "",
    response_model=list[GroupResponse],
    summary="List groups",
)
async def list_groups(current_user: OptionalUser, session: DBSession) -> list[GroupModel]:
    """List public groups and, when authenticated, the caller's own groups."""
    user_id = current_user.user_id if current_user else None
    return await GroupService(session).list_groups(user_id)


@router.get(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Get a group",
)
async def get_group(
    group_id: str,
    current_user: OptionalUser,
    session: DBSession,
) -> GroupModel:
    """Get a group. Private groups are visible to members only."""
    user_id = current_user.user_id if current_user else None
    return await GroupService(session).get_group(group_id, user_id)


@router.put(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Update a group",
)
async def update_group(
    group_id: str,
    group_data: GroupUpdate,
    current_user: AuthenticatedUser,
    session: DBSession,
) -> GroupModel:
    """Update a group's name, description or privacy. Creator only."""
    group = await GroupService(session).update_group(
        group_id,
        current_user.user_id,
        group_data.model_dump(exclude_unset=True),
    )
    await session.commit()
    return group


@router.delete(
    "/{group_id}",
    response_model=MessageResponse,
    summary="Delete a group",
)
async def delete_group(
    group_id: str,
    current_user: AuthenticatedUser,
    session: DBSession,
) -> MessageResponse:
    """Delete a group. Creator only; the group's tasks are not removed."""
    await GroupService(session).delete_group(group_id, current_user.user_id)
    await session.commit()
    return MessageResponse(message="Study group deleted successfully.")


@router.post(
    "/{group_id}/join",
    response_model=GroupActionResponse,
    summary="Join a group",
)
async def join_group(
    group_id: str,
    current_user: AuthenticatedUser,
    session: DBSession,
    join_data: JoinRequest | None = None,
) -> GroupActionResponse:
    """Join a group, presenting the join code if it is private."""
    group = await GroupService(session).join_group(
        group_id,
        current_user.user_id,
        join_code=join_data.join_code if join_data else None,
    )
    await session.commit()
    return GroupActionResponse(
        message="Successfully joined the group!",
        group=GroupResponse.model_validate(group),
    )


@router.post(
    "/{group_id}/leave",
    response_model=GroupActionResponse,
    summary="Leave a group",
)
async def leave_group(
    group_id: str,
    current_user: AuthenticatedUser,
    session: DBSession,
) -> GroupActionResponse:
    """Leave a group."""
    group = await GroupService(session).leave_group(group_id, current_user.user_id)
    await session.commit()
    return GroupActionResponse(
        message="Successfully left the group!",
        group=GroupResponse.model_validate(group),
    )
