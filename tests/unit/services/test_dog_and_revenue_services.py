"""Unit tests for DogService and RevenueService."""

from datetime import date
from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    DogHasAppointmentsError,
    DogNotFoundError,
    InvalidPeriodError,
    NotAShopMemberError,
)
from domain.entities.appointment import Appointment, AppointmentServiceLine, AppointmentStatus
from domain.entities.dog import Dog
from domain.entities.shop import Shop, ShopRole
from domain.services.dog_service import DogService
from domain.services.revenue_service import RevenueService
from tests.unit.conftest import FakeUnitOfWork, echo, member_of


@pytest.fixture
def member_uow(uow: FakeUnitOfWork, shop: Shop, user_id: UUID) -> FakeUnitOfWork:
    uow.shops.get.return_value = shop
    uow.shops.get_member.return_value = member_of(shop.id, user_id, ShopRole.STAFF)
    return uow


# --- DogService ---


class TestDogService:
    @pytest.mark.asyncio
    async def test_create_ignores_unknown_fields(
        self, member_uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        member_uow.dogs.create.side_effect = echo

        dog = await DogService(lambda: member_uow).create(
            shop.id, user_id, "Coco", breed="Poodle", is_deleted=True
        )

        assert dog.name == "Coco"
        assert dog.breed == "Poodle"
        assert dog.is_deleted is False

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(
        self, member_uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        dog = Dog(shop_id=shop.id, name="Coco", breed="Poodle", note="Bites")
        member_uow.dogs.get.return_value = dog
        member_uow.dogs.update.side_effect = echo

        updated = await DogService(lambda: member_uow).update(dog.id, user_id, note=None)

        assert updated.note is None
        assert updated.breed == "Poodle"

    @pytest.mark.asyncio
    async def test_soft_deleted_dog_is_not_found(
        self, member_uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        member_uow.dogs.get.return_value = Dog(shop_id=shop.id, name="Coco", is_deleted=True)

        with pytest.raises(DogNotFoundError):
            await DogService(lambda: member_uow).get(uuid4(), user_id)

    @pytest.mark.asyncio
    async def test_delete_refused_with_active_appointments(
        self, member_uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        dog = Dog(shop_id=shop.id, name="Coco")
        member_uow.dogs.get.return_value = dog
        member_uow.appointments.count_active_for_dog.return_value = 1

        with pytest.raises(DogHasAppointmentsError):
            await DogService(lambda: member_uow).delete(dog.id, user_id)

        assert dog.is_deleted is False

    @pytest.mark.asyncio
    async def test_delete_is_soft(
        self, member_uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        dog = Dog(shop_id=shop.id, name="Coco")
        member_uow.dogs.get.return_value = dog
        member_uow.appointments.count_active_for_dog.return_value = 0

        await DogService(lambda: member_uow).delete(dog.id, user_id)

        assert dog.is_deleted is True
        member_uow.dogs.update.assert_awaited_once_with(dog)
        assert member_uow.committed

    @pytest.mark.asyncio
    async def test_blank_search_returns_nothing(
        self, member_uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        assert await DogService(lambda: member_uow).search(shop.id, user_id, "   ") == []
        member_uow.dogs.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_history_includes_appointments(
        self, member_uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        dog = Dog(shop_id=shop.id, name="Coco")
        visits = [
            Appointment(
                shop_id=shop.id, dog_id=dog.id, created_by=user_id, appointment_at=date(2026, 2, 1)
            )
        ]
        member_uow.dogs.get.return_value = dog
        member_uow.appointments.list_for_dog.return_value = visits

        history = await DogService(lambda: member_uow).history(dog.id, user_id)

        assert history.dog is dog
        assert history.appointments == visits

    @pytest.mark.asyncio
    async def test_dog_of_other_shop_requires_membership_there(
        self, uow: FakeUnitOfWork, user_id: UUID
    ) -> None:
        uow.dogs.get.return_value = Dog(shop_id=uuid4(), name="Max")
        uow.shops.get_member.return_value = None

        with pytest.raises(NotAShopMemberError):
            await DogService(lambda: uow).get(uuid4(), user_id)


# --- RevenueService ---


def booked(shop_id: UUID, amount: int | None, status: AppointmentStatus) -> Appointment:
    return Appointment(
        shop_id=shop_id,
        dog_id=uuid4(),
        created_by=uuid4(),
        appointment_at=date(2026, 3, 10),
        amount=amount,
        status=status,
    )


class TestRevenueService:
    @pytest.mark.asyncio
    async def test_summarizes_period(
        self, member_uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        settled = booked(shop.id, 30000, AppointmentStatus.SETTLED)
        completed = booked(shop.id, 20000, AppointmentStatus.COMPLETED)
        cancelled = booked(shop.id, 50000, AppointmentStatus.CANCELLED)
        unpriced = booked(shop.id, None, AppointmentStatus.SCHEDULED)
        member_uow.appointments.list_for_shop.return_value = [
            settled,
            completed,
            cancelled,
            unpriced,
        ]
        member_uow.appointments.get_lines.return_value = [
            AppointmentServiceLine(unpriced.id, uuid4(), 15000),
            AppointmentServiceLine(unpriced.id, uuid4(), 5000),
        ]

        summary = await RevenueService(lambda: member_uow).summarize(
            shop.id, user_id, date(2026, 3, 1), date(2026, 3, 31)
        )

        assert summary.total_amount == 70000
        assert summary.settled_amount == 30000
        assert summary.pending_amount == 40000
        assert summary.appointment_count == 3
        member_uow.appointments.get_lines.assert_awaited_once_with([unpriced.id])

    @pytest.mark.asyncio
    async def test_empty_period_is_zero(
        self, member_uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        member_uow.appointments.list_for_shop.return_value = []

        summary = await RevenueService(lambda: member_uow).summarize(
            shop.id, user_id, date(2026, 3, 1), date(2026, 3, 1)
        )

        assert summary.total_amount == 0
        assert summary.appointment_count == 0
        member_uow.appointments.get_lines.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejects_inverted_period(
        self, member_uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        with pytest.raises(InvalidPeriodError):
            await RevenueService(lambda: member_uow).summarize(
                shop.id, user_id, date(2026, 3, 31), date(2026, 3, 1)
            )
