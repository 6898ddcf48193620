"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.profile import Profile
from domain.entities.shop import Shop, ShopMember, ShopRole


class FakeUnitOfWork:
    """Fake Unit of Work with all 6 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.shops = AsyncMock()
        self.invitations = AsyncMock()
        self.grooming_types = AsyncMock()
        self.dogs = AsyncMock()
        self.appointments = AsyncMock()
        self.commit_count = 0
        self.rolled_back = False

    @property
    def committed(self) -> bool:
        return self.commit_count > 0

    async def commit(self) -> None:
        self.commit_count += 1

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


async def echo(entity: Any) -> Any:
    """Side effect for repository writes that return what they were given."""
    return entity


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def shop_id() -> UUID:
    """A random shop ID."""
    return uuid4()


@pytest.fixture
def shop(shop_id: UUID, user_id: UUID) -> Shop:
    return Shop(id=shop_id, name="Happy Paws", created_by=user_id)


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    return Profile(id=user_id, email="owner@example.com", name="Owner")


def member_of(shop_id: UUID, user_id: UUID, role: ShopRole, **kwargs: Any) -> ShopMember:
    """Build a membership row."""
    return ShopMember(shop_id=shop_id, user_id=user_id, role=role, **kwargs)
