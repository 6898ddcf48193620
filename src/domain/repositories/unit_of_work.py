"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.appointment_repository import IAppointmentRepository
from domain.repositories.dog_repository import IDogRepository
from domain.repositories.grooming_type_repository import IGroomingTypeRepository
from domain.repositories.invitation_repository import IInvitationRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.shop_repository import IShopRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    profiles: IProfileRepository
    shops: IShopRepository
    invitations: IInvitationRepository
    grooming_types: IGroomingTypeRepository
    dogs: IDogRepository
    appointments: IAppointmentRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
