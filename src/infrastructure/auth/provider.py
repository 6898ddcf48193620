"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """Represents a user extracted from an access token."""

    id: UUID
    email: str
    name: Optional[str] = None


class IAuthProvider(Protocol):
    """Protocol for token issuing and validation."""

    access_token_ttl_seconds: int

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an access token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None if invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """Create a short-lived access token for a user."""
        ...

    def create_refresh_token(self, user_id: UUID) -> str:
        """Create a long-lived refresh token for a user."""
        ...

    def validate_refresh_token(self, token: str) -> Optional[UUID]:
        """
        Validate a refresh token.

        Returns:
            The user ID it was issued to, or None if invalid or expired
        """
        ...
