"""Invitation repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.invitation import Invitation


class IInvitationRepository(Protocol):
    """Repository interface for Invitation entities."""

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation."""
        ...

    async def get_by_id(self, id: UUID) -> Invitation | None:
        """Get an invitation by its primary key."""
        ...

    async def get_by_token(self, token: str) -> Invitation | None:
        """Get an invitation by exact token match."""
        ...

    async def get_for_shop(self, shop_id: UUID) -> list[Invitation]:
        """Get all invitations for a shop, newest first."""
        ...

    async def get_pending_for_shop_email(self, shop_id: UUID, email: str) -> Invitation | None:
        """Get the pending invitation for a shop and email, if any."""
        ...

    async def update(self, invitation: Invitation) -> Invitation:
        """Persist status, token and expiry changes."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete an invitation."""
        ...
