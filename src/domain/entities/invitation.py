"""Invitation domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from uuid import UUID, uuid4

from domain.entities.shop import ShopRole


class InvitationStatus(StrEnum):
    """Status of a shop staff invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


# Default invitation expiry: 7 days
INVITATION_EXPIRY_DAYS = 7


def default_expiry() -> datetime:
    """Expiry timestamp for an invitation issued now."""
    return datetime.utcnow() + timedelta(days=INVITATION_EXPIRY_DAYS)


@dataclass
class Invitation:
    """Domain entity for a shop staff invitation."""

    shop_id: UUID
    email: str
    token: str
    invited_by: UUID
    role: ShopRole = ShopRole.STAFF
    id: UUID = field(default_factory=uuid4)
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime = field(default_factory=default_expiry)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_expired(self) -> bool:
        """Check if the expiry timestamp has passed."""
        return datetime.utcnow() > self.expires_at

    @property
    def is_pending(self) -> bool:
        """Check if the invitation is still pending and not expired."""
        return self.status == InvitationStatus.PENDING and not self.is_expired

    def accept(self) -> None:
        """Mark the invitation as accepted."""
        self.status = InvitationStatus.ACCEPTED
        self.updated_at = datetime.utcnow()

    def cancel(self) -> None:
        """Mark the invitation as cancelled."""
        self.status = InvitationStatus.CANCELLED
        self.updated_at = datetime.utcnow()

    def expire(self) -> None:
        """Mark the invitation as expired."""
        self.status = InvitationStatus.EXPIRED
        self.updated_at = datetime.utcnow()

    def refresh(self, token: str) -> None:
        """Issue a new token and restart the expiry window."""
        self.token = token
        self.expires_at = default_expiry()
        self.updated_at = datetime.utcnow()


@dataclass
class ShopSummary:
    """Minimal shop information shown to invitees."""

    id: UUID
    name: str


@dataclass
class InvitationView:
    """What an invitee sees when opening an invitation link."""

    email: str
    role: ShopRole
    expires_at: datetime
    shop: ShopSummary


@dataclass
class AcceptedInvitation:
    """Result of a successful acceptance."""

    shop: ShopSummary
    role: ShopRole
