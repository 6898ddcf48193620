"""Pydantic schemas for Auth API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LocalLoginRequest(BaseModel):
    """Schema for email-only sign-in with the local provider."""

    email: str = Field(..., min_length=3, max_length=255)
    name: str | None = Field(None, max_length=100)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Invalid email address")
        return v


class RefreshRequest(BaseModel):
    """Schema for exchanging a refresh token."""

    refresh_token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Schema for an issued token pair."""

    model_config = ConfigDict(from_attributes=True)

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class ProfileResponse(BaseModel):
    """Schema for the authenticated user's profile."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str | None = None
    profile_image: str | None = None
    provider: str
    shop_id: UUID | None = None
    created_at: datetime
