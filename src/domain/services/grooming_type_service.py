"""Grooming type catalog service."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from core.exceptions import DuplicateGroomingTypeError, GroomingTypeNotFoundError
from domain.entities.grooming_type import GroomingType
from domain.entities.shop import ShopRole
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access import get_shop_or_raise, require_role

logger = structlog.get_logger()


class GroomingTypeService:
    """Service layer for a shop's grooming service catalog."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_for_shop(
        self,
        shop_id: UUID,
        user_id: UUID,
        include_inactive: bool = False,
    ) -> list[GroomingType]:
        """List the catalog. Any member may read it."""
        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.STAFF)
            return await uow.grooming_types.list_for_shop(  # type: ignore[no-any-return]
                shop_id, include_inactive
            )

    async def create(
        self,
        shop_id: UUID,
        user_id: UUID,
        name: str,
        description: str | None = None,
        default_price: int = 0,
    ) -> GroomingType:
        """Add a grooming type. Requires Manager+ role."""
        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.MANAGER)

            name = name.strip()
            await self._ensure_name_available(uow, shop_id, name)

            created = await uow.grooming_types.create(
                GroomingType(
                    shop_id=shop_id,
                    name=name,
                    description=description,
                    default_price=default_price,
                )
            )
            await uow.commit()
            logger.info("grooming_type_created", shop_id=str(shop_id), name=name)
            return created

    async def update(
        self,
        shop_id: UUID,
        grooming_type_id: UUID,
        user_id: UUID,
        name: str | None = None,
        description: str | None = None,
        default_price: int | None = None,
        is_active: bool | None = None,
    ) -> GroomingType:
        """Partially update a grooming type, including re-activation."""
        async with self._uow_factory() as uow:
            await require_role(uow, shop_id, user_id, ShopRole.MANAGER)
            grooming_type = await self._get_in_shop(uow, shop_id, grooming_type_id)

            if name is not None and name.strip() != grooming_type.name:
                await self._ensure_name_available(uow, shop_id, name.strip())
                grooming_type.name = name.strip()
            if is_active and not grooming_type.is_active:
                await self._ensure_name_available(
                    uow, shop_id, grooming_type.name, exclude_id=grooming_type.id
                )
            if description is not None:
                grooming_type.description = description
            if default_price is not None:
                grooming_type.default_price = default_price
            if is_active is not None:
                grooming_type.is_active = is_active

            grooming_type.updated_at = datetime.utcnow()
            updated = await uow.grooming_types.update(grooming_type)
            await uow.commit()
            return updated

    async def deactivate(self, shop_id: UUID, grooming_type_id: UUID, user_id: UUID) -> None:
        """Logically delete a grooming type. Past appointments keep their lines."""
        async with self._uow_factory() as uow:
            await require_role(uow, shop_id, user_id, ShopRole.MANAGER)
            grooming_type = await self._get_in_shop(uow, shop_id, grooming_type_id)

            grooming_type.deactivate()
            await uow.grooming_types.update(grooming_type)
            await uow.commit()
            logger.info(
                "grooming_type_deactivated",
                shop_id=str(shop_id),
                grooming_type_id=str(grooming_type_id),
            )

    # --- Internal helpers ---

    async def _get_in_shop(
        self, uow: IUnitOfWork, shop_id: UUID, grooming_type_id: UUID
    ) -> GroomingType:
        grooming_type = await uow.grooming_types.get(grooming_type_id)
        if not grooming_type or grooming_type.shop_id != shop_id:
            raise GroomingTypeNotFoundError(str(grooming_type_id))
        return grooming_type

    async def _ensure_name_available(
        self,
        uow: IUnitOfWork,
        shop_id: UUID,
        name: str,
        exclude_id: UUID | None = None,
    ) -> None:
        matches = await uow.grooming_types.find_by_name(shop_id, name)
        if any(m.is_active and m.id != exclude_id for m in matches):
            raise DuplicateGroomingTypeError(name)
