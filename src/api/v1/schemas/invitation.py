"""Pydantic schemas for Invitation API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.entities.invitation import Invitation

ROLE_PATTERN = "^(owner|manager|staff)$"


class CreateInvitationRequest(BaseModel):
    """Schema for inviting someone to a shop."""

    shop_id: UUID
    email: str = Field(..., min_length=3, max_length=255)
    role: str = Field("staff", pattern=ROLE_PATTERN)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Basic email validation."""
        v = v.strip().lower()
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Invalid email address")
        return v


class InvitationResponse(BaseModel):
    """Schema for Invitation response. The token is never exposed."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "shop_id": "456e4567-e89b-12d3-a456-426614174000",
                "email": "groomer@example.com",
                "role": "staff",
                "status": "pending",
                "invited_by": "789e4567-e89b-12d3-a456-426614174000",
                "created_at": "2026-02-01T10:00:00",
                "expires_at": "2026-02-08T10:00:00",
            }
        },
    )

    id: UUID
    shop_id: UUID
    email: str
    role: str
    status: str
    invited_by: UUID
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_entity(cls, invitation: Invitation) -> "InvitationResponse":
        return cls(
            id=invitation.id,
            shop_id=invitation.shop_id,
            email=invitation.email,
            role=invitation.role.label,
            status=invitation.status.value,
            invited_by=invitation.invited_by,
            created_at=invitation.created_at,
            expires_at=invitation.expires_at,
        )


class InvitationListResponse(BaseModel):
    """Schema for list of Invitations response."""

    data: list[InvitationResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class InvitationCreatedResponse(BaseModel):
    """Schema for invitation creation response."""

    data: InvitationResponse


class ShopSummaryResponse(BaseModel):
    """Minimal shop information."""

    id: UUID
    name: str


class InvitationViewResponse(BaseModel):
    """What an invitee sees before accepting."""

    email: str
    role: str
    expires_at: datetime
    shop: ShopSummaryResponse


class AcceptInvitationResponse(BaseModel):
    """Schema for accepting an invitation response."""

    shop: ShopSummaryResponse
    role: str
    message: str = "Invitation accepted successfully"


class ResendInvitationResponse(BaseModel):
    """Schema for resending an invitation response."""

    expires_at: datetime
    message: str = "Invitation resent successfully"
