"""
User Schemas

Request/response models for account and authentication endpoints.

Output DTOs (UserResponse, AuthResponse) are built field by field from the
ORM model. They have no password or refresh-token field, so those values
cannot be serialized by accident.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from channelhub.shared.models.user import User
from channelhub.shared.schemas.common import BaseSchema


# ═══════════════════════════════════════════════════════════════════════════════
# REQUESTS
# ═══════════════════════════════════════════════════════════════════════════════


class UserLogin(BaseModel):
    """Login with handle or email."""

    handle: Optional[str] = None
    email: Optional[str] = None
    password: str = Field(min_length=1)

    @model_validator(mode="after")
    def require_identifier(self) -> "UserLogin":
        if not (self.handle or self.email):
            raise ValueError("Email or handle is required")
        return self

    @property
    def identifier(self) -> str:
        return self.email or self.handle or ""


class RefreshTokenRequest(BaseModel):
    """Body fallback when the refresh token is not sent as a cookie."""

    refresh_token: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    """Schema for changing the current password."""

    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8, max_length=72)


class UpdateProfileRequest(BaseModel):
    """Schema for account detail updates."""

    display_name: str = Field(min_length=3, max_length=15)
    email: EmailStr


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class UserResponse(BaseSchema):
    """Account owner's view of their profile."""

    id: str
    handle: str
    email: str
    display_name: str
    avatar_url: str
    cover_image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            handle=user.handle,
            email=user.email,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            cover_image_url=user.cover_image_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class TokenPair(BaseModel):
    """Freshly issued access/refresh tokens."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # access token lifetime, seconds


class AuthResponse(TokenPair):
    """Login result: the profile plus the token pair."""

    user: UserResponse
