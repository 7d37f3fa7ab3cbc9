"""Authentication API routes.

Provides endpoints for user registration and login.
"""

from fastapi import APIRouter, status

from studysync.core.logging import get_logger
from studysync.domain.services import CredentialService
from studysync.infrastructure.api.dependencies import DBSession
from studysync.infrastructure.api.schemas import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from studysync.infrastructure.auth import jwt_service
from studysync.infrastructure.persistence.models import UserModel

logger = get_logger(__name__)

router = APIRouter()


def _auth_response(user: UserModel) -> AuthResponse:
    return AuthResponse(
        token=jwt_service.create_access_token(user.id),
        expires_in=jwt_service.get_expires_in(),
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Username or email already exists"},
    },
)
async def register(request: RegisterRequest, session: DBSession) -> AuthResponse:
    """Register a new user and log them in.

    Returns a JWT access token for immediate authentication.
    """
    service = CredentialService(session)
    user = await service.register(
        username=request.username,
        email=request.email,
        password=request.password,
        full_name=request.full_name,
    )
    await session.commit()
    return _auth_response(user)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
    },
)
async def login(request: LoginRequest, session: DBSession) -> AuthResponse:
    """Authenticate with email and password."""
    service = CredentialService(session)
    user = await service.authenticate(request.email, request.password)
    await session.commit()
    return _auth_response(user)
