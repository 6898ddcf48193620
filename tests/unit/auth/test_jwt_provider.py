"""Unit tests for JWTAuthProvider.

Covers:
- access tokens round-tripping through validate_token
- validate_token returning None when payload lacks sub or email
- access and refresh tokens never being accepted as each other
- expiry of both token kinds
"""

from uuid import uuid4

import pytest
from jose import jwt as jose_jwt

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    """Create an HS256-signed JWT with a given payload."""
    return jose_jwt.encode(payload, secret, algorithm="HS256")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(
        secret_key="test-secret",
        refresh_secret_key="test-refresh-secret",
        algorithm="HS256",
        expire_minutes=30,
        refresh_expire_days=7,
    )


@pytest.fixture
def token_user() -> TokenUser:
    return TokenUser(id=uuid4(), email="groomer@example.com", name="Groomer")


# ---------------------------------------------------------------------------
# Tests: access tokens
# ---------------------------------------------------------------------------


class TestAccessToken:
    async def test_should_round_trip_user_claims(
        self, provider: JWTAuthProvider, token_user: TokenUser
    ):
        token = provider.create_token(token_user)

        result = await provider.validate_token(token)

        assert result == token_user

    async def test_should_accept_token_without_name(self, provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), email="anon@example.com")

        result = await provider.validate_token(provider.create_token(user))

        assert result is not None
        assert result.name is None

    async def test_should_reject_expired_token(self, token_user: TokenUser):
        expired = JWTAuthProvider(
            secret_key="test-secret",
            refresh_secret_key="test-refresh-secret",
            algorithm="HS256",
            expire_minutes=-1,
        )

        assert await expired.validate_token(expired.create_token(token_user)) is None

    async def test_should_reject_token_signed_with_other_secret(self, token_user: TokenUser):
        other = JWTAuthProvider(
            secret_key="other-secret",
            refresh_secret_key="test-refresh-secret",
            algorithm="HS256",
        )
        provider = JWTAuthProvider(
            secret_key="test-secret",
            refresh_secret_key="test-refresh-secret",
            algorithm="HS256",
        )

        assert await provider.validate_token(other.create_token(token_user)) is None

    def test_should_report_ttl_in_seconds(self, provider: JWTAuthProvider):
        assert provider.access_token_ttl_seconds == 30 * 60


# ---------------------------------------------------------------------------
# Tests: validate_token returns None for missing claims
# ---------------------------------------------------------------------------


class TestValidateTokenMissingClaims:
    """validate_token should return None when the decoded payload is missing
    the required 'sub' or 'email' claims."""

    async def test_should_return_none_when_token_has_no_sub_claim(
        self, provider: JWTAuthProvider
    ):
        token = _make_hs256_token({"email": "user@example.com", "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_should_return_none_when_token_has_no_email_claim(
        self, provider: JWTAuthProvider
    ):
        token = _make_hs256_token({"sub": str(uuid4()), "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_should_return_none_when_token_has_empty_email(
        self, provider: JWTAuthProvider
    ):
        token = _make_hs256_token({"sub": str(uuid4()), "email": "", "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_should_return_none_when_sub_is_not_a_uuid(self, provider: JWTAuthProvider):
        token = _make_hs256_token(
            {"sub": "not-a-uuid", "email": "user@example.com", "exp": 9999999999}
        )

        assert await provider.validate_token(token) is None


# ---------------------------------------------------------------------------
# Tests: refresh tokens
# ---------------------------------------------------------------------------


class TestRefreshToken:
    def test_should_return_user_id(self, provider: JWTAuthProvider):
        user_id = uuid4()

        assert provider.validate_refresh_token(provider.create_refresh_token(user_id)) == user_id

    def test_should_be_unique_per_call(self, provider: JWTAuthProvider):
        user_id = uuid4()

        assert provider.create_refresh_token(user_id) != provider.create_refresh_token(user_id)

    async def test_should_not_be_accepted_as_access_token(self, provider: JWTAuthProvider):
        token = provider.create_refresh_token(uuid4())

        assert await provider.validate_token(token) is None

    def test_should_not_accept_access_token(
        self, provider: JWTAuthProvider, token_user: TokenUser
    ):
        assert provider.validate_refresh_token(provider.create_token(token_user)) is None

    def test_should_reject_wrong_type_under_refresh_secret(self, provider: JWTAuthProvider):
        token = _make_hs256_token(
            {"sub": str(uuid4()), "type": "access", "exp": 9999999999},
            secret="test-refresh-secret",
        )

        assert provider.validate_refresh_token(token) is None

    def test_should_reject_expired_refresh_token(self):
        expired = JWTAuthProvider(
            secret_key="test-secret",
            refresh_secret_key="test-refresh-secret",
            algorithm="HS256",
            refresh_expire_days=-1,
        )

        assert expired.validate_refresh_token(expired.create_refresh_token(uuid4())) is None

    def test_should_reject_garbage(self, provider: JWTAuthProvider):
        assert provider.validate_refresh_token("not.a.jwt") is None
