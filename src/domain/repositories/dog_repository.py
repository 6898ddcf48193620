"""Dog repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.dog import Dog


class IDogRepository(Protocol):
    """Repository interface for Dog entities.

    Lookups return soft-deleted rows only through ``get``; listings never do.
    """

    async def get(self, id: UUID) -> Dog | None:
        """Get a dog by ID."""
        ...

    async def list_for_shop(self, shop_id: UUID) -> list[Dog]:
        """Get the shop's dogs ordered by name."""
        ...

    async def search(self, shop_id: UUID, query: str) -> list[Dog]:
        """Case-insensitive substring search on dog name."""
        ...

    async def create(self, dog: Dog) -> Dog:
        """Create a new dog."""
        ...

    async def update(self, dog: Dog) -> Dog:
        """Update an existing dog."""
        ...
