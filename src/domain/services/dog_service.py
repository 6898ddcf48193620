"""Dog (customer) service layer."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import DogHasAppointmentsError, DogNotFoundError
from domain.entities.appointment import Appointment
from domain.entities.dog import Dog
from domain.entities.shop import ShopRole
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access import get_shop_or_raise, require_role

logger = structlog.get_logger()

# Fields a client may change on an existing dog
_UPDATABLE_FIELDS = (
    "name",
    "breed",
    "owner_name",
    "owner_phone_number",
    "note",
    "weight",
    "birth_year",
    "birth_month",
)


@dataclass
class DogHistory:
    """A dog with every appointment it has had, newest first."""

    dog: Dog
    appointments: list[Appointment] = field(default_factory=list)


class DogService:
    """Service layer for the dogs a shop grooms."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, shop_id: UUID, user_id: UUID, name: str, **fields: Any) -> Dog:
        """Register a dog with the shop."""
        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.STAFF)

            dog = Dog(shop_id=shop_id, name=name, **self._pick(fields))
            created = await uow.dogs.create(dog)
            await uow.commit()
            logger.info("dog_created", shop_id=str(shop_id), dog_id=str(created.id))
            return created

    async def get(self, dog_id: UUID, user_id: UUID) -> Dog:
        """Get a dog. Requires membership in its shop."""
        async with self._uow_factory() as uow:
            return await self._get_accessible(uow, dog_id, user_id)

    async def update(self, dog_id: UUID, user_id: UUID, **fields: Any) -> Dog:
        """Partially update a dog. Only the keyword arguments passed change."""
        async with self._uow_factory() as uow:
            dog = await self._get_accessible(uow, dog_id, user_id)

            for name, value in self._pick(fields).items():
                setattr(dog, name, value)

            dog.updated_at = datetime.utcnow()
            updated = await uow.dogs.update(dog)
            await uow.commit()
            return updated

    async def list_for_shop(self, shop_id: UUID, user_id: UUID) -> list[Dog]:
        """List the shop's dogs."""
        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.STAFF)
            return await uow.dogs.list_for_shop(shop_id)  # type: ignore[no-any-return]

    async def search(self, shop_id: UUID, user_id: UUID, query: str) -> list[Dog]:
        """Find dogs whose name contains the query, ignoring case."""
        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.STAFF)
            query = query.strip()
            if not query:
                return []
            return await uow.dogs.search(shop_id, query)  # type: ignore[no-any-return]

    async def history(self, dog_id: UUID, user_id: UUID) -> DogHistory:
        """A dog and its appointment history."""
        async with self._uow_factory() as uow:
            dog = await self._get_accessible(uow, dog_id, user_id)
            appointments = await uow.appointments.list_for_dog(dog_id)
            return DogHistory(dog=dog, appointments=appointments)

    async def delete(self, dog_id: UUID, user_id: UUID) -> None:
        """Soft-delete a dog that has no active appointments.

        Raises:
            DogNotFoundError: If the dog does not exist or is already deleted.
            DogHasAppointmentsError: If non-cancelled appointments remain.
        """
        async with self._uow_factory() as uow:
            dog = await self._get_accessible(uow, dog_id, user_id)

            if await uow.appointments.count_active_for_dog(dog_id) > 0:
                raise DogHasAppointmentsError(str(dog_id))

            dog.soft_delete()
            await uow.dogs.update(dog)
            await uow.commit()
            logger.info("dog_deleted", shop_id=str(dog.shop_id), dog_id=str(dog_id))

    # --- Internal helpers ---

    async def _get_accessible(self, uow: IUnitOfWork, dog_id: UUID, user_id: UUID) -> Dog:
        dog = await uow.dogs.get(dog_id)
        if not dog or dog.is_deleted:
            raise DogNotFoundError(str(dog_id))
        await require_role(uow, dog.shop_id, user_id, ShopRole.STAFF)
        return dog

    @staticmethod
    def _pick(fields: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in fields.items() if k in _UPDATABLE_FIELDS}
