"""Shop service layer with business logic."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from core.exceptions import ShopHasEmployeesError, UserNotFoundError
from domain.entities.shop import Shop, ShopMember, ShopRole, ShopWithRole
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access import get_shop_or_raise, require_role

logger = structlog.get_logger()


class ShopService:
    """Service layer for Shop business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(
        self,
        user_id: UUID,
        name: str,
        address: str | None = None,
        phone: str | None = None,
    ) -> Shop:
        """Create a new shop and add the creator as Owner.

        The shop also becomes the creator's primary shop when they have none.
        """
        async with self._uow_factory() as uow:
            user = await uow.profiles.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            created = await uow.shops.create(
                Shop(name=name, address=address, phone=phone, created_by=user_id)
            )
            await uow.shops.add_member(
                ShopMember(shop_id=created.id, user_id=user_id, role=ShopRole.OWNER)
            )

            if user.shop_id is None:
                user.shop_id = created.id
                await uow.profiles.update(user)

            await uow.commit()
            logger.info("shop_created", shop_id=str(created.id), user_id=str(user_id))
            return created

    async def get(self, shop_id: UUID, user_id: UUID) -> ShopWithRole:
        """Get a shop, verifying membership."""
        async with self._uow_factory() as uow:
            shop = await get_shop_or_raise(uow, shop_id)
            member = await require_role(uow, shop_id, user_id)
            return ShopWithRole(shop=shop, role=member.role)

    async def list_for_user(self, user_id: UUID) -> list[ShopWithRole]:
        """Get all shops a user works at."""
        async with self._uow_factory() as uow:
            return await uow.shops.get_all_for_user(user_id)  # type: ignore[no-any-return]

    async def update(
        self,
        shop_id: UUID,
        user_id: UUID,
        name: str | None = None,
        address: str | None = None,
        phone: str | None = None,
    ) -> Shop:
        """Update a shop. Requires Manager+ role."""
        async with self._uow_factory() as uow:
            shop = await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.MANAGER)

            if name is not None:
                shop.name = name
            if address is not None:
                shop.address = address
            if phone is not None:
                shop.phone = phone

            shop.updated_at = datetime.utcnow()
            updated = await uow.shops.update(shop)
            await uow.commit()
            return updated

    async def delete(self, shop_id: UUID, user_id: UUID) -> bool:
        """Delete a shop. Requires Owner role and no remaining employees."""
        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.OWNER)

            # The caller is one of the members; anyone else blocks deletion.
            if await uow.shops.count_members(shop_id) > 1:
                raise ShopHasEmployeesError(str(shop_id))

            deleted = await uow.shops.delete(shop_id)
            await uow.commit()
            logger.info("shop_deleted", shop_id=str(shop_id), user_id=str(user_id))
            return deleted  # type: ignore[no-any-return]
