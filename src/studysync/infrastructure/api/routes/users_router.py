"""User profile routes."""

from fastapi import APIRouter

from studysync.domain.exceptions import NotFoundError
from studysync.domain.services import CredentialService
from studysync.infrastructure.api.dependencies import AuthenticatedUser, DBSession
from studysync.infrastructure.api.schemas import UserResponse
from studysync.infrastructure.persistence.models import UserModel

router = APIRouter(tags=["Users"])


@router.get("/me", response_model=UserResponse, summary="Get the current user")
async def get_me(current_user: AuthenticatedUser, session: DBSession) -> UserModel:
    """Return the authenticated user's profile."""
    user = await CredentialService(session).get_user(current_user.user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user
