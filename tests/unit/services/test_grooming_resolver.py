"""Unit tests for AppointmentGroomingResolver."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import InactiveGroomingTypeError, UnknownGroomingTypeError
from domain.entities.appointment import AppointmentServiceLine, ServiceLineRequest
from domain.entities.grooming_type import GroomingType
from domain.services.grooming_resolver import AppointmentGroomingResolver
from tests.unit.conftest import FakeUnitOfWork, echo


@pytest.fixture
def resolver() -> AppointmentGroomingResolver:
    return AppointmentGroomingResolver()


def catalog(uow: FakeUnitOfWork, *types: GroomingType) -> None:
    by_id = {t.id: t for t in types}

    async def lookup(grooming_type_id: UUID) -> GroomingType | None:
        return by_id.get(grooming_type_id)

    uow.grooming_types.get.side_effect = lookup


class TestValidateServiceLines:
    @pytest.mark.asyncio
    async def test_uses_default_price_when_none_given(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork, shop_id: UUID
    ) -> None:
        bath = GroomingType(shop_id=shop_id, name="Bath", default_price=15000)
        catalog(uow, bath)

        result = await resolver.validate_service_lines(
            uow, shop_id, [ServiceLineRequest(grooming_type_id=bath.id)]
        )

        assert len(result) == 1
        assert result[0].applied_price == 15000
        assert result[0].grooming_type_name == "Bath"

    @pytest.mark.asyncio
    async def test_explicit_zero_price_is_kept(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork, shop_id: UUID
    ) -> None:
        bath = GroomingType(shop_id=shop_id, name="Bath", default_price=15000)
        catalog(uow, bath)

        result = await resolver.validate_service_lines(
            uow, shop_id, [ServiceLineRequest(grooming_type_id=bath.id, applied_price=0)]
        )

        assert result[0].applied_price == 0

    @pytest.mark.asyncio
    async def test_preserves_request_order(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork, shop_id: UUID
    ) -> None:
        bath = GroomingType(shop_id=shop_id, name="Bath", default_price=15000)
        trim = GroomingType(shop_id=shop_id, name="Full trim", default_price=30000)
        catalog(uow, bath, trim)

        result = await resolver.validate_service_lines(
            uow,
            shop_id,
            [
                ServiceLineRequest(grooming_type_id=trim.id, applied_price=28000),
                ServiceLineRequest(grooming_type_id=bath.id),
            ],
        )

        assert [r.grooming_type_name for r in result] == ["Full trim", "Bath"]
        assert [r.applied_price for r in result] == [28000, 15000]

    @pytest.mark.asyncio
    async def test_rejects_type_from_another_shop(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork, shop_id: UUID
    ) -> None:
        foreign = GroomingType(shop_id=uuid4(), name="Bath", default_price=15000)
        catalog(uow, foreign)

        with pytest.raises(UnknownGroomingTypeError):
            await resolver.validate_service_lines(
                uow, shop_id, [ServiceLineRequest(grooming_type_id=foreign.id)]
            )

    @pytest.mark.asyncio
    async def test_rejects_missing_type(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork, shop_id: UUID
    ) -> None:
        catalog(uow)

        with pytest.raises(UnknownGroomingTypeError):
            await resolver.validate_service_lines(
                uow, shop_id, [ServiceLineRequest(grooming_type_id=uuid4())]
            )

    @pytest.mark.asyncio
    async def test_inactive_type_error_names_the_type(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork, shop_id: UUID
    ) -> None:
        spa = GroomingType(shop_id=shop_id, name="Spa", default_price=5000, is_active=False)
        catalog(uow, spa)

        with pytest.raises(InactiveGroomingTypeError) as exc_info:
            await resolver.validate_service_lines(
                uow, shop_id, [ServiceLineRequest(grooming_type_id=spa.id)]
            )

        assert exc_info.value.name == "Spa"
        assert exc_info.value.details["name"] == "Spa"

    @pytest.mark.asyncio
    async def test_one_bad_line_fails_the_whole_request(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork, shop_id: UUID
    ) -> None:
        bath = GroomingType(shop_id=shop_id, name="Bath", default_price=15000)
        catalog(uow, bath)

        with pytest.raises(UnknownGroomingTypeError):
            await resolver.validate_service_lines(
                uow,
                shop_id,
                [
                    ServiceLineRequest(grooming_type_id=bath.id),
                    ServiceLineRequest(grooming_type_id=uuid4()),
                ],
            )

        uow.appointments.add_line.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_request_is_valid(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork, shop_id: UUID
    ) -> None:
        assert await resolver.validate_service_lines(uow, shop_id, []) == []


class TestAttachAndReplace:
    @pytest.mark.asyncio
    async def test_replace_deletes_then_inserts(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork, shop_id: UUID
    ) -> None:
        bath = GroomingType(shop_id=shop_id, name="Bath", default_price=15000)
        catalog(uow, bath)
        uow.appointments.add_line.side_effect = echo
        appointment_id = uuid4()

        validated = await resolver.validate_service_lines(
            uow, shop_id, [ServiceLineRequest(grooming_type_id=bath.id)]
        )
        lines = await resolver.replace_appointment_lines(uow, appointment_id, validated)

        uow.appointments.delete_lines.assert_awaited_once_with(appointment_id)
        assert len(lines) == 1
        assert lines[0].appointment_id == appointment_id
        assert lines[0].applied_price == 15000
        assert lines[0].grooming_type_name == "Bath"

    @pytest.mark.asyncio
    async def test_replace_with_empty_set_clears_lines(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork
    ) -> None:
        appointment_id = uuid4()

        lines = await resolver.replace_appointment_lines(uow, appointment_id, [])

        uow.appointments.delete_lines.assert_awaited_once_with(appointment_id)
        uow.appointments.add_line.assert_not_awaited()
        assert lines == []


class TestAbsorbLegacyLabel:
    @pytest.mark.asyncio
    async def test_creates_missing_type_with_zero_price(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork, shop_id: UUID
    ) -> None:
        uow.grooming_types.find_by_name.return_value = []
        uow.grooming_types.create.side_effect = echo

        created = await resolver.absorb_legacy_label(uow, shop_id, "  Teeth cleaning ")

        assert created is not None
        assert created.name == "Teeth cleaning"
        assert created.default_price == 0
        uow.grooming_types.find_by_name.assert_awaited_once_with(shop_id, "Teeth cleaning")

    @pytest.mark.asyncio
    async def test_reuses_existing_type(
        self, resolver: AppointmentGroomingResolver, uow: FakeUnitOfWork, shop_id: UUID
    ) -> None:
        existing = GroomingType(shop_id=shop_id, name="Bath", default_price=15000)
        uow.grooming_types.find_by_name.return_value = [existing]

        result = await resolver.absorb_legacy_label(uow, shop_id, "Bath")

        assert result is existing
        uow.grooming_types.create.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("label", [None, "", "   "])
    async def test_blank_label_is_ignored(
        self,
        resolver: AppointmentGroomingResolver,
        uow: FakeUnitOfWork,
        shop_id: UUID,
        label: str | None,
    ) -> None:
        assert await resolver.absorb_legacy_label(uow, shop_id, label) is None
        uow.grooming_types.find_by_name.assert_not_awaited()


class TestLabelsAndPrices:
    def test_resolve_price(self) -> None:
        bath = GroomingType(shop_id=uuid4(), name="Bath", default_price=15000)

        assert AppointmentGroomingResolver.resolve_price(None, bath) == 15000
        assert AppointmentGroomingResolver.resolve_price(12000, bath) == 12000
        assert AppointmentGroomingResolver.resolve_price(0, bath) == 0

    def test_display_label_joins_names_in_order(self) -> None:
        appointment_id = uuid4()
        lines = [
            AppointmentServiceLine(appointment_id, uuid4(), 15000, grooming_type_name="Bath"),
            AppointmentServiceLine(appointment_id, uuid4(), 30000, grooming_type_name="Full trim"),
        ]

        assert AppointmentGroomingResolver.build_display_label(lines) == "Bath, Full trim"

    def test_display_label_is_none_without_lines(self) -> None:
        assert AppointmentGroomingResolver.build_display_label([]) is None
