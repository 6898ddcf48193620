"""Employee (shop membership) service."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AlreadyAMemberError,
    InsufficientPermissionsError,
    LastOwnerError,
    ShopMemberNotFoundError,
    UserNotFoundError,
)
from domain.entities.common import Page
from domain.entities.shop import ShopMember, ShopRole
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access import check_can_grant, get_shop_or_raise, require_role

logger = structlog.get_logger()

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class EmployeeService:
    """Service layer for managing a shop's employees."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_for_shop(
        self,
        shop_id: UUID,
        user_id: UUID,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Page[ShopMember]:
        """List active employees one page at a time.

        ``page`` is clamped to at least 1 and ``limit`` to 1..100.
        """
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)

        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.STAFF)

            total = await uow.shops.count_members(shop_id)
            members = await uow.shops.list_members(shop_id, (page - 1) * limit, limit)
            return Page(items=members, total=total, page=page, limit=limit)

    async def add(
        self,
        shop_id: UUID,
        user_id: UUID,
        target_user_id: UUID,
        role: ShopRole = ShopRole.STAFF,
    ) -> ShopMember:
        """Add an existing user to the shop. Requires Manager+ role.

        Only owners may grant the owner role.
        """
        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            actor = await require_role(uow, shop_id, user_id, ShopRole.MANAGER)
            check_can_grant(actor, role)

            target = await uow.profiles.get(target_user_id)
            if not target:
                raise UserNotFoundError(str(target_user_id))

            existing = await uow.shops.get_member(shop_id, target_user_id)
            if existing and existing.is_active:
                raise AlreadyAMemberError(str(target_user_id))

            if existing:
                existing.is_active = True
                existing.role = role
                member = await uow.shops.update_member(existing)
            else:
                member = await uow.shops.add_member(
                    ShopMember(shop_id=shop_id, user_id=target_user_id, role=role)
                )

            if target.shop_id is None:
                target.shop_id = shop_id
                await uow.profiles.update(target)

            await uow.commit()
            logger.info(
                "employee_added",
                shop_id=str(shop_id),
                user_id=str(target_user_id),
                role=role.label,
            )
            return member

    async def update_role(self, member_id: UUID, user_id: UUID, role: ShopRole) -> ShopMember:
        """Change an employee's role. Requires Manager+ role."""
        async with self._uow_factory() as uow:
            member = await self._get_member_or_raise(uow, member_id)
            actor = await require_role(uow, member.shop_id, user_id, ShopRole.MANAGER)
            check_can_grant(actor, role)
            if member.role == ShopRole.OWNER and actor.role != ShopRole.OWNER:
                raise InsufficientPermissionsError(ShopRole.OWNER.label)

            if member.role == ShopRole.OWNER and role != ShopRole.OWNER:
                if await uow.shops.count_owners(member.shop_id) <= 1:
                    raise LastOwnerError()

            member.role = role
            updated = await uow.shops.update_member(member)
            await uow.commit()
            logger.info(
                "employee_role_changed",
                shop_id=str(member.shop_id),
                member_id=str(member_id),
                role=role.label,
            )
            return updated

    async def remove(self, member_id: UUID, user_id: UUID) -> bool:
        """Remove an employee from the shop. Requires Manager+ role."""
        async with self._uow_factory() as uow:
            member = await self._get_member_or_raise(uow, member_id)
            actor = await require_role(uow, member.shop_id, user_id, ShopRole.MANAGER)

            if member.role == ShopRole.OWNER:
                if actor.role != ShopRole.OWNER:
                    raise InsufficientPermissionsError(ShopRole.OWNER.label)
                if await uow.shops.count_owners(member.shop_id) <= 1:
                    raise LastOwnerError()

            removed = await uow.shops.remove_member(member_id)

            profile = await uow.profiles.get(member.user_id)
            if profile and profile.shop_id == member.shop_id:
                profile.shop_id = None
                await uow.profiles.update(profile)

            await uow.commit()
            logger.info(
                "employee_removed",
                shop_id=str(member.shop_id),
                member_id=str(member_id),
            )
            return removed  # type: ignore[no-any-return]

    # --- Internal helpers ---

    async def _get_member_or_raise(self, uow: IUnitOfWork, member_id: UUID) -> ShopMember:
        member = await uow.shops.get_member_by_id(member_id)
        if not member or not member.is_active:
            raise ShopMemberNotFoundError(str(member_id))
        return member
