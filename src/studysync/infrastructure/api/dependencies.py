"""FastAPI dependencies for authentication.

Resolves the ``Authorization: Bearer <token>`` header into the principal
that every registry call receives explicitly.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from studysync.core.logging import get_logger
from studysync.domain.exceptions import UnauthorizedError
from studysync.infrastructure.auth import (
    InvalidTokenError,
    TokenExpiredError,
    jwt_service,
)
from studysync.infrastructure.persistence.database import get_db_session
from studysync.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


@dataclass
class CurrentUser:
    """The authenticated user attached to a request.

    Loaded from the database after token verification; never carries the
    password hash.
    """

    user_id: str
    username: str
    email: str
    full_name: str | None = None


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


async def _resolve_principal(token: str, session: AsyncSession) -> CurrentUser:
    try:
        user_id = jwt_service.verify_access_token(token)
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise UnauthorizedError("Not authorized, token failed.")
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise UnauthorizedError("Not authorized, token failed.")

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        logger.info("Authentication failed: user not found", user_id=user_id)
        raise UnauthorizedError("Not authorized, user not found.")

    return CurrentUser(
        user_id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
    )


async def get_current_user(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Require a valid bearer token and return its user.

    Raises:
        UnauthorizedError: If the header is missing or not a bearer token,
            the token fails verification, or its user no longer exists.
    """
    token = _extract_bearer_token(authorization)
    if token is None:
        logger.info("Authentication failed: no bearer token")
        raise UnauthorizedError("Not authorized, no token.")
    return await _resolve_principal(token, session)


async def get_optional_user(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser | None:
    """Return the caller if a token is sent, ``None`` for anonymous requests.

    A header that is present but does not resolve is still rejected.
    """
    if authorization is None:
        return None
    token = _extract_bearer_token(authorization)
    if token is None:
        raise UnauthorizedError("Not authorized, no token.")
    return await _resolve_principal(token, session)


# Type aliases for dependency injection
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
OptionalUser = Annotated[CurrentUser | None, Depends(get_optional_user)]
DBSession = Annotated[AsyncSession, Depends(get_db_session)]
