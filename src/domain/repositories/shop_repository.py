"""Shop repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.shop import Shop, ShopMember, ShopWithRole


class IShopRepository(Protocol):
    """Repository interface for Shop entities and their memberships."""

    async def get(self, id: UUID) -> Shop | None:
        """Get a shop by ID."""
        ...

    async def get_all_for_user(self, user_id: UUID) -> list[ShopWithRole]:
        """Get all shops a user is an active member of, with their role."""
        ...

    async def create(self, shop: Shop) -> Shop:
        """Create a new shop."""
        ...

    async def update(self, shop: Shop) -> Shop:
        """Update an existing shop."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a shop and return success status."""
        ...

    async def get_member(self, shop_id: UUID, user_id: UUID) -> ShopMember | None:
        """Get a membership by shop and user IDs."""
        ...

    async def get_member_by_id(self, member_id: UUID) -> ShopMember | None:
        """Get a membership by its own ID."""
        ...

    async def list_members(self, shop_id: UUID, offset: int, limit: int) -> list[ShopMember]:
        """Get one page of active members, oldest first."""
        ...

    async def count_members(self, shop_id: UUID) -> int:
        """Count the active members of a shop."""
        ...

    async def count_owners(self, shop_id: UUID) -> int:
        """Count the active owners of a shop."""
        ...

    async def add_member(self, member: ShopMember) -> ShopMember:
        """Add a member to a shop."""
        ...

    async def update_member(self, member: ShopMember) -> ShopMember:
        """Persist a changed membership (role or active flag)."""
        ...

    async def remove_member(self, member_id: UUID) -> bool:
        """Remove a membership."""
        ...
