"""Grooming type repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.grooming_type import GroomingType


class IGroomingTypeRepository(Protocol):
    """Repository interface for GroomingType entities."""

    async def get(self, id: UUID) -> GroomingType | None:
        """Get a grooming type by ID, whatever its shop or state."""
        ...

    async def list_for_shop(
        self, shop_id: UUID, include_inactive: bool = False
    ) -> list[GroomingType]:
        """Get a shop's catalog ordered by name."""
        ...

    async def find_by_name(self, shop_id: UUID, name: str) -> list[GroomingType]:
        """Get the shop's grooming types with exactly this name, active first."""
        ...

    async def create(self, grooming_type: GroomingType) -> GroomingType:
        """Create a new grooming type."""
        ...

    async def update(self, grooming_type: GroomingType) -> GroomingType:
        """Update an existing grooming type."""
        ...
