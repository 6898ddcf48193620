"""JWT authentication provider implementation.

Access and refresh tokens are both HS256 JWTs, signed with separate
secrets so that one kind can never be accepted as the other.

Access token payload:
    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "name": "Jane",
        "type": "access",
        "exp": 1234567890
    }

Refresh token payload:
    {
        "sub": "user-uuid",
        "type": "refresh",
        "jti": "random-hex",
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        refresh_secret_key: str = settings.jwt_refresh_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        refresh_expire_days: int = settings.jwt_refresh_expire_days,
    ) -> None:
        self._secret_key = secret_key
        self._refresh_secret_key = refresh_secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._refresh_expire_days = refresh_expire_days

    @property
    def access_token_ttl_seconds(self) -> int:
        """Lifetime of an access token in seconds."""
        return self._expire_minutes * 60

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an access token and extract user info.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid, expired or not an access token
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except JWTError:
            return None

        if payload.get("type", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
            return None

        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or not email:
            return None

        try:
            return TokenUser(id=UUID(user_id), email=email, name=payload.get("name"))
        except ValueError:
            logger.warning("Access token carried a malformed subject")
            return None

    def create_token(self, user: TokenUser) -> str:
        """
        Create an access token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        payload: dict = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.name,
            "type": ACCESS_TOKEN_TYPE,
            "iat": now,
            "exp": now + timedelta(minutes=self._expire_minutes),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def create_refresh_token(self, user_id: UUID) -> str:
        """Create a refresh token. Each call yields a distinct token."""
        now = datetime.utcnow()
        payload: dict = {
            "sub": str(user_id),
            "type": REFRESH_TOKEN_TYPE,
            "jti": uuid4().hex,
            "iat": now,
            "exp": now + timedelta(days=self._refresh_expire_days),
        }
        return jwt.encode(payload, self._refresh_secret_key, algorithm=self._algorithm)

    def validate_refresh_token(self, token: str) -> Optional[UUID]:
        """Return the user ID of a valid refresh token, or None."""
        try:
            payload = jwt.decode(
                token,
                self._refresh_secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except JWTError:
            return None

        if payload.get("type") != REFRESH_TOKEN_TYPE:
            return None

        try:
            return UUID(payload.get("sub", ""))
        except ValueError:
            return None
