"""Unit tests for AuthService refresh-token rotation."""

from uuid import uuid4

import pytest

from core.exceptions import AuthenticationError, ErrorCode, UserNotFoundError
from domain.entities.profile import AuthProvider, Profile
from domain.services.auth_service import AuthService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from tests.unit.conftest import FakeUnitOfWork, echo


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(
        secret_key="access-secret",
        refresh_secret_key="refresh-secret",
        algorithm="HS256",
        expire_minutes=15,
        refresh_expire_days=7,
    )


@pytest.fixture
def service(uow: FakeUnitOfWork, provider: JWTAuthProvider) -> AuthService:
    return AuthService(lambda: uow, auth_provider=provider)


@pytest.fixture
def stored_profile(uow: FakeUnitOfWork, profile: Profile) -> Profile:
    uow.profiles.get.return_value = profile
    uow.profiles.update.side_effect = echo
    return profile


class TestAuthService:
    @pytest.mark.asyncio
    async def test_issue_stores_refresh_token_hash(
        self, service: AuthService, uow: FakeUnitOfWork, stored_profile: Profile
    ) -> None:
        pair = await service.issue_tokens(stored_profile.id)

        assert pair.token_type == "bearer"
        assert pair.expires_in == 15 * 60
        assert stored_profile.refresh_token_hash is not None
        assert stored_profile.refresh_token_hash != pair.refresh_token
        assert len(stored_profile.refresh_token_hash) == 64
        assert uow.committed

    @pytest.mark.asyncio
    async def test_access_token_identifies_user(
        self, service: AuthService, provider: JWTAuthProvider, stored_profile: Profile
    ) -> None:
        pair = await service.issue_tokens(stored_profile.id)

        user = await provider.validate_token(pair.access_token)

        assert user is not None
        assert user.id == stored_profile.id
        assert user.email == stored_profile.email

    @pytest.mark.asyncio
    async def test_refresh_rotates_tokens(
        self, service: AuthService, stored_profile: Profile
    ) -> None:
        first = await service.issue_tokens(stored_profile.id)

        second = await service.refresh(first.refresh_token)

        assert second.refresh_token != first.refresh_token

    @pytest.mark.asyncio
    async def test_rotated_out_token_is_rejected(
        self, service: AuthService, stored_profile: Profile
    ) -> None:
        first = await service.issue_tokens(stored_profile.id)
        await service.refresh(first.refresh_token)

        with pytest.raises(AuthenticationError) as exc_info:
            await service.refresh(first.refresh_token)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_access_token_cannot_refresh(
        self, service: AuthService, stored_profile: Profile
    ) -> None:
        pair = await service.issue_tokens(stored_profile.id)

        with pytest.raises(AuthenticationError):
            await service.refresh(pair.access_token)

    @pytest.mark.asyncio
    async def test_logout_revokes_refresh_token(
        self, service: AuthService, stored_profile: Profile
    ) -> None:
        pair = await service.issue_tokens(stored_profile.id)

        await service.logout(stored_profile.id)

        assert stored_profile.refresh_token_hash is None
        with pytest.raises(AuthenticationError):
            await service.refresh(pair.refresh_token)

    @pytest.mark.asyncio
    async def test_inactive_user_cannot_refresh(
        self, service: AuthService, stored_profile: Profile
    ) -> None:
        pair = await service.issue_tokens(stored_profile.id)
        stored_profile.is_active = False

        with pytest.raises(AuthenticationError):
            await service.refresh(pair.refresh_token)

    @pytest.mark.asyncio
    async def test_unknown_user(self, service: AuthService, uow: FakeUnitOfWork) -> None:
        uow.profiles.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.get_profile(uuid4())


class TestLocalLogin:
    @pytest.mark.asyncio
    async def test_creates_profile_on_first_sign_in(
        self, service: AuthService, uow: FakeUnitOfWork, provider: JWTAuthProvider
    ) -> None:
        uow.profiles.get_by_email.return_value = None
        uow.profiles.create.side_effect = echo
        uow.profiles.update.side_effect = echo

        pair = await service.login_local("  New.Groomer@Example.com ", name="Mina")

        created = uow.profiles.create.await_args.args[0]
        assert created.email == "new.groomer@example.com"
        assert created.name == "Mina"
        assert created.provider == AuthProvider.LOCAL
        assert created.refresh_token_hash is not None
        user = await provider.validate_token(pair.access_token)
        assert user is not None and user.id == created.id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_reuses_existing_profile(
        self, service: AuthService, uow: FakeUnitOfWork, profile: Profile
    ) -> None:
        uow.profiles.get_by_email.return_value = profile
        uow.profiles.update.side_effect = echo

        await service.login_local(profile.email)

        uow.profiles.create.assert_not_awaited()
        assert profile.refresh_token_hash is not None

    @pytest.mark.asyncio
    async def test_deactivated_profile_is_refused(
        self, service: AuthService, uow: FakeUnitOfWork, profile: Profile
    ) -> None:
        profile.is_active = False
        uow.profiles.get_by_email.return_value = profile

        with pytest.raises(AuthenticationError):
            await service.login_local(profile.email)

        assert not uow.committed
