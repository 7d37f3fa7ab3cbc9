"""Pydantic schemas for authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request body for user registration."""

    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=6, description="User's password")
    full_name: str | None = Field(None, max_length=255, description="Optional full name")


class LoginRequest(BaseModel):
    """Request body for user login."""

    email: str = Field(..., min_length=1, description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class UserResponse(BaseModel):
    """User information returned by the API. Never includes the password."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="User's email address")
    full_name: str | None = Field(None, description="Full name")
    created_at: datetime = Field(..., description="When the user was created")

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Response for successful authentication (login/register)."""

    token: str = Field(..., description="JWT access token")
    expires_in: int = Field(..., description="Access token expiration time in seconds")
    user: UserResponse = Field(..., description="User information")


class ValidationErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str = Field(..., description="Field name that failed validation")
    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    error: str = Field(..., description="Error kind")
    message: str = Field(..., description="Human-readable error message")
    details: list[ValidationErrorDetail] | None = Field(
        None, description="Field-level validation errors"
    )
