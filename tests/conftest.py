"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from uuid import UUID, uuid4

# Disable rate limiting and real email delivery in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["EMAIL_BACKEND"] = "console"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.gateways.email_gateway import EmailResult
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, ProfileModel

# Test database URL (SQLite in memory, one shared connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user ID for consistency
TEST_USER_ID = uuid4()


class RecordingEmailGateway:
    """Email gateway double that records every message instead of sending it."""

    def __init__(self) -> None:
        self.sent: list[dict[str, str | None]] = []
        self.fail_with: str | None = None

    async def send(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> EmailResult:
        if self.fail_with:
            return EmailResult(success=False, error=self.fail_with)
        self.sent.append({"to": to, "subject": subject, "html": html_body, "text": text_body})
        return EmailResult(success=True, message_id=f"test-{len(self.sent)}")


@pytest.fixture(scope="session")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    await engine.dispose()


@pytest.fixture(scope="session")
async def setup_database(engine: AsyncEngine) -> AsyncGenerator[None, None]:
    """Create all tables once per session."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture(scope="session")
async def session_factory(
    engine: AsyncEngine, setup_database: None
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create session factory."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    yield factory


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.com",
        name="Test User",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        refresh_secret_key="test-refresh-secret-key",
        algorithm="HS256",
        expire_minutes=30,
        refresh_expire_days=7,
    )


@pytest.fixture
def email_gateway() -> RecordingEmailGateway:
    """A fresh recording email gateway."""
    return RecordingEmailGateway()


@pytest.fixture
def create_profile(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[ProfileModel]]:
    """Insert a profile row. Emails default to a unique address."""

    async def _create(email: str | None = None, name: str | None = None) -> ProfileModel:
        profile = ProfileModel(
            id=uuid4(),
            email=email or f"user-{uuid4().hex[:12]}@example.com",
            name=name,
            provider="local",
        )
        async with session_factory() as session:
            session.add(profile)
            await session.commit()
        return profile

    return _create


@pytest.fixture
def headers_for(auth_provider: JWTAuthProvider) -> Callable[[ProfileModel], dict[str, str]]:
    """Build authorization headers for a stored profile."""

    def _headers(profile: ProfileModel) -> dict[str, str]:
        token = auth_provider.create_token(
            TokenUser(id=profile.id, email=profile.email, name=profile.name)
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth, no database overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def app_client(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    email_gateway: RecordingEmailGateway,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    This client:
    - Uses an in-memory SQLite database shared by every test
    - Validates real access tokens issued by the test auth provider
    - Records outgoing email instead of sending it
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_appointment_service,
        get_auth_service,
        get_dog_service,
        get_employee_service,
        get_grooming_type_service,
        get_invitation_service,
        get_revenue_service,
        get_shop_service,
    )
    from domain.services.appointment_service import AppointmentService
    from domain.services.auth_service import AuthService
    from domain.services.dog_service import DogService
    from domain.services.employee_service import EmployeeService
    from domain.services.grooming_type_service import GroomingTypeService
    from domain.services.invitation_service import InvitationService
    from domain.services.revenue_service import RevenueService
    from domain.services.shop_service import ShopService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_invitation_service] = lambda: InvitationService(
        test_uow_factory,
        email_gateway=email_gateway,
        frontend_url="http://frontend.test",
    )
    app.dependency_overrides[get_shop_service] = lambda: ShopService(test_uow_factory)
    app.dependency_overrides[get_employee_service] = lambda: EmployeeService(test_uow_factory)
    app.dependency_overrides[get_grooming_type_service] = lambda: GroomingTypeService(
        test_uow_factory
    )
    app.dependency_overrides[get_dog_service] = lambda: DogService(test_uow_factory)
    app.dependency_overrides[get_appointment_service] = lambda: AppointmentService(
        test_uow_factory
    )
    app.dependency_overrides[get_revenue_service] = lambda: RevenueService(test_uow_factory)
    app.dependency_overrides[get_auth_service] = lambda: AuthService(
        test_uow_factory, auth_provider=auth_provider
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def new_shop(
    app_client: AsyncClient,
    headers_for: Callable[[ProfileModel], dict[str, str]],
) -> Callable[[ProfileModel], Awaitable[UUID]]:
    """Create a shop through the API; the given profile becomes its owner."""

    async def _create(owner: ProfileModel, name: str = "Happy Paws") -> UUID:
        response = await app_client.post(
            "/api/v1/shops", json={"name": name}, headers=headers_for(owner)
        )
        assert response.status_code == 201, response.text
        return UUID(response.json()["data"]["id"])

    return _create
