"""Token issuing and refresh-token rotation."""

import hashlib
import hmac
from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import AuthenticationError, ErrorCode, UserNotFoundError
from domain.entities.auth import TokenPair
from domain.entities.profile import AuthProvider, Profile
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IAuthProvider, TokenUser

logger = structlog.get_logger()


class AuthService:
    """Issues access/refresh token pairs and rotates refresh tokens.

    Only a SHA-256 hash of the latest refresh token is stored on the
    profile. Refreshing replaces it, so a token that has been used once is
    rejected afterwards.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth = auth_provider

    async def issue_tokens(self, user_id: UUID) -> TokenPair:
        """Issue a new token pair for a user, replacing any stored refresh token."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise UserNotFoundError(str(user_id))

            pair = await self._rotate(uow, profile)
            await uow.commit()
            return pair

    async def login_local(self, email: str, name: str | None = None) -> TokenPair:
        """Find or create a local-provider profile by email and issue tokens.

        Raises:
            AuthenticationError: If the profile exists but is deactivated.
        """
        normalized_email = email.lower().strip()

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_email(normalized_email)
            if profile is None:
                profile = await uow.profiles.create(
                    Profile(
                        email=normalized_email,
                        name=name,
                        provider=AuthProvider.LOCAL,
                        provider_id=normalized_email,
                    )
                )
                logger.info("profile_created", user_id=str(profile.id), provider="local")
            elif not profile.is_active:
                raise AuthenticationError(message="This account has been deactivated")

            pair = await self._rotate(uow, profile)
            await uow.commit()
            return pair

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Exchange a refresh token for a new pair.

        Raises:
            AuthenticationError: If the token is invalid, expired, or no
                longer the one stored for the user.
        """
        user_id = self._auth.validate_refresh_token(refresh_token)
        if user_id is None:
            raise AuthenticationError(
                message="Invalid or expired refresh token",
                error_code=ErrorCode.INVALID_TOKEN,
            )

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if (
                not profile
                or not profile.is_active
                or not profile.refresh_token_hash
                or not hmac.compare_digest(
                    profile.refresh_token_hash, self._hash_token(refresh_token)
                )
            ):
                logger.warning("refresh_token_rejected", user_id=str(user_id))
                raise AuthenticationError(
                    message="Refresh token has been revoked",
                    error_code=ErrorCode.INVALID_TOKEN,
                )

            pair = await self._rotate(uow, profile)
            await uow.commit()
            return pair

    async def logout(self, user_id: UUID) -> None:
        """Revoke the user's refresh token."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise UserNotFoundError(str(user_id))

            profile.refresh_token_hash = None
            await uow.profiles.update(profile)
            await uow.commit()
            logger.info("user_logged_out", user_id=str(user_id))

    async def get_profile(self, user_id: UUID) -> Profile:
        """Get the authenticated user's profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if not profile:
                raise UserNotFoundError(str(user_id))
            return profile

    # --- Internal helpers ---

    async def _rotate(self, uow: IUnitOfWork, profile: Profile) -> TokenPair:
        access_token = self._auth.create_token(
            TokenUser(id=profile.id, email=profile.email, name=profile.name)
        )
        refresh_token = self._auth.create_refresh_token(profile.id)

        profile.refresh_token_hash = self._hash_token(refresh_token)
        await uow.profiles.update(profile)

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self._auth.access_token_ttl_seconds,
        )

    @staticmethod
    def _hash_token(token: str) -> str:
        """Hash a refresh token using SHA-256."""
        return hashlib.sha256(token.encode()).hexdigest()
