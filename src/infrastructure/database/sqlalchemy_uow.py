"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_appointment_repo import (
    SQLAlchemyAppointmentRepository,
)
from infrastructure.database.repositories.sqlalchemy_dog_repo import SQLAlchemyDogRepository
from infrastructure.database.repositories.sqlalchemy_grooming_type_repo import (
    SQLAlchemyGroomingTypeRepository,
)
from infrastructure.database.repositories.sqlalchemy_invitation_repo import (
    SQLAlchemyInvitationRepository,
)
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)
from infrastructure.database.repositories.sqlalchemy_shop_repo import SQLAlchemyShopRepository


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    One instance is one session and one transaction. Repositories are
    created on access and share that session.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def session(self) -> AsyncSession:
        """The active session."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        return SQLAlchemyProfileRepository(self.session)

    @property
    def shops(self) -> SQLAlchemyShopRepository:
        """Get shop repository."""
        return SQLAlchemyShopRepository(self.session)

    @property
    def invitations(self) -> SQLAlchemyInvitationRepository:
        """Get invitation repository."""
        return SQLAlchemyInvitationRepository(self.session)

    @property
    def grooming_types(self) -> SQLAlchemyGroomingTypeRepository:
        """Get grooming type repository."""
        return SQLAlchemyGroomingTypeRepository(self.session)

    @property
    def dogs(self) -> SQLAlchemyDogRepository:
        """Get dog repository."""
        return SQLAlchemyDogRepository(self.session)

    @property
    def appointments(self) -> SQLAlchemyAppointmentRepository:
        """Get appointment repository."""
        return SQLAlchemyAppointmentRepository(self.session)

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
