"""Authentication value objects."""

from dataclasses import dataclass


@dataclass
class TokenPair:
    """Access and refresh tokens issued together."""

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"
