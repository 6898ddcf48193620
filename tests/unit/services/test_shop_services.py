"""Unit tests for ShopService, EmployeeService and GroomingTypeService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AlreadyAMemberError,
    DuplicateGroomingTypeError,
    GroomingTypeNotFoundError,
    InsufficientPermissionsError,
    LastOwnerError,
    ShopHasEmployeesError,
    ShopMemberNotFoundError,
    UserNotFoundError,
)
from domain.entities.grooming_type import GroomingType
from domain.entities.profile import Profile
from domain.entities.shop import Shop, ShopRole
from domain.services.employee_service import EmployeeService
from domain.services.grooming_type_service import GroomingTypeService
from domain.services.shop_service import ShopService
from tests.unit.conftest import FakeUnitOfWork, echo, member_of

# --- ShopService ---


class TestShopService:
    @pytest.mark.asyncio
    async def test_creator_becomes_owner_and_primary_shop_is_set(
        self, uow: FakeUnitOfWork, profile: Profile
    ) -> None:
        uow.profiles.get.return_value = profile
        uow.shops.create.side_effect = echo

        shop = await ShopService(lambda: uow).create(profile.id, "Happy Paws")

        owner = uow.shops.add_member.await_args.args[0]
        assert owner.user_id == profile.id
        assert owner.role == ShopRole.OWNER
        assert profile.shop_id == shop.id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_existing_primary_shop_is_kept(
        self, uow: FakeUnitOfWork, profile: Profile
    ) -> None:
        primary = uuid4()
        profile.shop_id = primary
        uow.profiles.get.return_value = profile
        uow.shops.create.side_effect = echo

        await ShopService(lambda: uow).create(profile.id, "Second Shop")

        assert profile.shop_id == primary
        uow.profiles.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_refused_while_employees_remain(
        self, uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        uow.shops.get.return_value = shop
        uow.shops.get_member.return_value = member_of(shop.id, user_id, ShopRole.OWNER)
        uow.shops.count_members.return_value = 2

        with pytest.raises(ShopHasEmployeesError):
            await ShopService(lambda: uow).delete(shop.id, user_id)

        uow.shops.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_only_owner_may_delete(
        self, uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        uow.shops.get.return_value = shop
        uow.shops.get_member.return_value = member_of(shop.id, user_id, ShopRole.MANAGER)

        with pytest.raises(InsufficientPermissionsError):
            await ShopService(lambda: uow).delete(shop.id, user_id)

    @pytest.mark.asyncio
    async def test_staff_cannot_update(
        self, uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        uow.shops.get.return_value = shop
        uow.shops.get_member.return_value = member_of(shop.id, user_id, ShopRole.STAFF)

        with pytest.raises(InsufficientPermissionsError):
            await ShopService(lambda: uow).update(shop.id, user_id, name="Renamed")


# --- EmployeeService ---


class TestEmployeeService:
    @pytest.mark.asyncio
    async def test_list_clamps_page_and_limit(
        self, uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        uow.shops.get.return_value = shop
        uow.shops.get_member.return_value = member_of(shop.id, user_id, ShopRole.STAFF)
        uow.shops.count_members.return_value = 250
        uow.shops.list_members.return_value = []

        page = await EmployeeService(lambda: uow).list_for_shop(
            shop.id, user_id, page=0, limit=500
        )

        uow.shops.list_members.assert_awaited_once_with(shop.id, 0, 100)
        assert page.page == 1
        assert page.limit == 100
        assert page.total_pages == 3

    @pytest.mark.asyncio
    async def test_list_offsets_by_page(
        self, uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        uow.shops.get.return_value = shop
        uow.shops.get_member.return_value = member_of(shop.id, user_id, ShopRole.STAFF)
        uow.shops.count_members.return_value = 45
        uow.shops.list_members.return_value = []

        await EmployeeService(lambda: uow).list_for_shop(shop.id, user_id, page=3, limit=20)

        uow.shops.list_members.assert_awaited_once_with(shop.id, 40, 20)

    @pytest.mark.asyncio
    async def test_add_rejects_active_member(
        self, uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        target = Profile(email="staff@example.com")
        uow.shops.get.return_value = shop
        uow.shops.get_member.side_effect = [
            member_of(shop.id, user_id, ShopRole.MANAGER),
            member_of(shop.id, target.id, ShopRole.STAFF),
        ]
        uow.profiles.get.return_value = target

        with pytest.raises(AlreadyAMemberError):
            await EmployeeService(lambda: uow).add(shop.id, user_id, target.id)

    @pytest.mark.asyncio
    async def test_add_unknown_user(self, uow: FakeUnitOfWork, shop: Shop, user_id: UUID) -> None:
        uow.shops.get.return_value = shop
        uow.shops.get_member.return_value = member_of(shop.id, user_id, ShopRole.OWNER)
        uow.profiles.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await EmployeeService(lambda: uow).add(shop.id, user_id, uuid4())

    @pytest.mark.asyncio
    async def test_manager_cannot_grant_owner(
        self, uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        uow.shops.get.return_value = shop
        uow.shops.get_member.return_value = member_of(shop.id, user_id, ShopRole.MANAGER)

        with pytest.raises(InsufficientPermissionsError):
            await EmployeeService(lambda: uow).add(shop.id, user_id, uuid4(), ShopRole.OWNER)

    @pytest.mark.asyncio
    async def test_last_owner_cannot_be_demoted(
        self, uow: FakeUnitOfWork, shop_id: UUID, user_id: UUID
    ) -> None:
        owner = member_of(shop_id, user_id, ShopRole.OWNER)
        uow.shops.get_member_by_id.return_value = owner
        uow.shops.get_member.return_value = owner
        uow.shops.count_owners.return_value = 1

        with pytest.raises(LastOwnerError):
            await EmployeeService(lambda: uow).update_role(owner.id, user_id, ShopRole.MANAGER)

        assert owner.role == ShopRole.OWNER

    @pytest.mark.asyncio
    async def test_owner_can_be_demoted_when_another_remains(
        self, uow: FakeUnitOfWork, shop_id: UUID, user_id: UUID
    ) -> None:
        actor = member_of(shop_id, user_id, ShopRole.OWNER)
        other_owner = member_of(shop_id, uuid4(), ShopRole.OWNER)
        uow.shops.get_member_by_id.return_value = other_owner
        uow.shops.get_member.return_value = actor
        uow.shops.count_owners.return_value = 2
        uow.shops.update_member.side_effect = echo

        updated = await EmployeeService(lambda: uow).update_role(
            other_owner.id, user_id, ShopRole.MANAGER
        )

        assert updated.role == ShopRole.MANAGER

    @pytest.mark.asyncio
    async def test_last_owner_cannot_be_removed(
        self, uow: FakeUnitOfWork, shop_id: UUID, user_id: UUID
    ) -> None:
        owner = member_of(shop_id, user_id, ShopRole.OWNER)
        uow.shops.get_member_by_id.return_value = owner
        uow.shops.get_member.return_value = owner
        uow.shops.count_owners.return_value = 1

        with pytest.raises(LastOwnerError):
            await EmployeeService(lambda: uow).remove(owner.id, user_id)

        uow.shops.remove_member.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_remove_clears_primary_shop(
        self, uow: FakeUnitOfWork, shop_id: UUID, user_id: UUID
    ) -> None:
        staff_profile = Profile(email="staff@example.com", shop_id=shop_id)
        staff = member_of(shop_id, staff_profile.id, ShopRole.STAFF)
        uow.shops.get_member_by_id.return_value = staff
        uow.shops.get_member.return_value = member_of(shop_id, user_id, ShopRole.MANAGER)
        uow.shops.remove_member.return_value = True
        uow.profiles.get.return_value = staff_profile

        assert await EmployeeService(lambda: uow).remove(staff.id, user_id) is True
        assert staff_profile.shop_id is None
        assert uow.committed

    @pytest.mark.asyncio
    async def test_inactive_membership_is_not_found(
        self, uow: FakeUnitOfWork, shop_id: UUID, user_id: UUID
    ) -> None:
        uow.shops.get_member_by_id.return_value = member_of(
            shop_id, uuid4(), ShopRole.STAFF, is_active=False
        )

        with pytest.raises(ShopMemberNotFoundError):
            await EmployeeService(lambda: uow).remove(uuid4(), user_id)


# --- GroomingTypeService ---


class TestGroomingTypeService:
    @pytest.mark.asyncio
    async def test_create_rejects_active_duplicate(
        self, uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        uow.shops.get.return_value = shop
        uow.shops.get_member.return_value = member_of(shop.id, user_id, ShopRole.MANAGER)
        uow.grooming_types.find_by_name.return_value = [
            GroomingType(shop_id=shop.id, name="Bath", default_price=15000)
        ]

        with pytest.raises(DuplicateGroomingTypeError):
            await GroomingTypeService(lambda: uow).create(shop.id, user_id, " Bath ")

    @pytest.mark.asyncio
    async def test_create_allows_name_of_deactivated_type(
        self, uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        uow.shops.get.return_value = shop
        uow.shops.get_member.return_value = member_of(shop.id, user_id, ShopRole.MANAGER)
        uow.grooming_types.find_by_name.return_value = [
            GroomingType(shop_id=shop.id, name="Bath", is_active=False)
        ]
        uow.grooming_types.create.side_effect = echo

        created = await GroomingTypeService(lambda: uow).create(
            shop.id, user_id, "Bath", default_price=18000
        )

        assert created.name == "Bath"
        assert created.default_price == 18000
        assert created.is_active

    @pytest.mark.asyncio
    async def test_staff_cannot_create(
        self, uow: FakeUnitOfWork, shop: Shop, user_id: UUID
    ) -> None:
        uow.shops.get.return_value = shop
        uow.shops.get_member.return_value = member_of(shop.id, user_id, ShopRole.STAFF)

        with pytest.raises(InsufficientPermissionsError):
            await GroomingTypeService(lambda: uow).create(shop.id, user_id, "Bath")

    @pytest.mark.asyncio
    async def test_deactivate_is_logical(
        self, uow: FakeUnitOfWork, shop_id: UUID, user_id: UUID
    ) -> None:
        bath = GroomingType(shop_id=shop_id, name="Bath")
        uow.shops.get_member.return_value = member_of(shop_id, user_id, ShopRole.OWNER)
        uow.grooming_types.get.return_value = bath

        await GroomingTypeService(lambda: uow).deactivate(shop_id, bath.id, user_id)

        assert bath.is_active is False
        uow.grooming_types.update.assert_awaited_once_with(bath)

    @pytest.mark.asyncio
    async def test_type_from_other_shop_is_not_found(
        self, uow: FakeUnitOfWork, shop_id: UUID, user_id: UUID
    ) -> None:
        uow.shops.get_member.return_value = member_of(shop_id, user_id, ShopRole.OWNER)
        uow.grooming_types.get.return_value = GroomingType(shop_id=uuid4(), name="Bath")

        with pytest.raises(GroomingTypeNotFoundError):
            await GroomingTypeService(lambda: uow).deactivate(shop_id, uuid4(), user_id)

    @pytest.mark.asyncio
    async def test_reactivation_checks_for_active_twin(
        self, uow: FakeUnitOfWork, shop_id: UUID, user_id: UUID
    ) -> None:
        retired = GroomingType(shop_id=shop_id, name="Bath", is_active=False)
        twin = GroomingType(shop_id=shop_id, name="Bath")
        uow.shops.get_member.return_value = member_of(shop_id, user_id, ShopRole.MANAGER)
        uow.grooming_types.get.return_value = retired
        uow.grooming_types.find_by_name.return_value = [retired, twin]

        with pytest.raises(DuplicateGroomingTypeError):
            await GroomingTypeService(lambda: uow).update(
                shop_id, retired.id, user_id, is_active=True
            )
