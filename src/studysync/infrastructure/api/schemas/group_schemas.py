"""Pydantic schemas for study group operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserSummary(BaseModel):
    """Public view of a user embedded in group and task responses."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="Email address")
    full_name: str | None = Field(None, description="Full name")

    model_config = ConfigDict(from_attributes=True)


class GroupCreate(BaseModel):
    """Schema for creating a group."""

    name: str = Field(..., min_length=3, max_length=100, description="Unique group name")
    description: str | None = Field(None, max_length=500, description="Group description")
    is_private: bool = Field(True, description="Whether joining requires the join code")

    model_config = ConfigDict(str_strip_whitespace=True)


class GroupUpdate(BaseModel):
    """Schema for updating a group. Omitted fields are left unchanged."""

    name: str | None = Field(None, max_length=100, description="Group name")
    description: str | None = Field(None, max_length=500, description="Group description")
    is_private: bool | None = Field(None, description="Whether joining requires the join code")

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        """An empty name means "no change"; a non-empty one needs 3 characters."""
        if value and len(value) < 3:
            raise ValueError("Group name must be at least 3 characters")
        return value


class JoinRequest(BaseModel):
    """Schema for joining a group."""

    join_code: str | None = Field(None, description="Join code, required for private groups")

    model_config = ConfigDict(str_strip_whitespace=True)


class GroupResponse(BaseModel):
    """Schema for group response."""

    id: str = Field(..., description="Group ID")
    name: str = Field(..., description="Group name")
    description: str | None = Field(None, description="Group description")
    is_private: bool = Field(..., description="Whether joining requires the join code")
    join_code: str | None = Field(None, description="Join code (private groups only)")
    creator: UserSummary = Field(..., description="User who created the group")
    members: list[UserSummary] = Field(default_factory=list, description="Group members")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GroupActionResponse(BaseModel):
    """Response for join and leave."""

    message: str
    group: GroupResponse


class MessageResponse(BaseModel):
    """Response carrying only a confirmation message."""

    message: str
