"""SQLAlchemy implementation of Invitation repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.invitation import Invitation, InvitationStatus
from domain.entities.shop import ShopRole
from infrastructure.database.models import InvitationModel


class SQLAlchemyInvitationRepository:
    """SQLAlchemy implementation of IInvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation."""
        model = self._to_model(invitation)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_by_id(self, id: UUID) -> Invitation | None:
        """Get an invitation by its primary key."""
        model = await self._session.get(InvitationModel, id)
        return self._to_entity(model) if model else None

    async def get_by_token(self, token: str) -> Invitation | None:
        """Get an invitation by exact token match."""
        stmt = select(InvitationModel).where(InvitationModel.token == token)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_for_shop(self, shop_id: UUID) -> list[Invitation]:
        """Get all invitations for a shop, newest first."""
        stmt = (
            select(InvitationModel)
            .where(InvitationModel.shop_id == shop_id)
            .order_by(InvitationModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_pending_for_shop_email(self, shop_id: UUID, email: str) -> Invitation | None:
        """Get the pending invitation for a shop and email, if any.

        Overdue rows that were never read still count as pending here.
        """
        stmt = (
            select(InvitationModel)
            .where(
                InvitationModel.shop_id == shop_id,
                InvitationModel.email == email,
                InvitationModel.status == InvitationStatus.PENDING.value,
            )
            .order_by(InvitationModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def update(self, invitation: Invitation) -> Invitation:
        """Persist status, token and expiry changes."""
        model = await self._session.get(InvitationModel, invitation.id)
        if not model:
            raise ValueError(f"Invitation {invitation.id} not found")

        model.status = invitation.status.value
        model.token = invitation.token
        model.expires_at = invitation.expires_at
        model.updated_at = invitation.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete an invitation."""
        model = await self._session.get(InvitationModel, id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: InvitationModel) -> Invitation:
        """Convert ORM model to domain entity."""
        return Invitation(
            id=model.id,
            shop_id=model.shop_id,
            email=model.email,
            role=ShopRole.from_label(model.role),
            token=model.token,
            invited_by=model.invited_by,
            status=InvitationStatus(model.status),
            expires_at=model.expires_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Invitation) -> InvitationModel:
        """Convert domain entity to ORM model."""
        return InvitationModel(
            id=entity.id,
            shop_id=entity.shop_id,
            email=entity.email,
            role=entity.role.label,
            token=entity.token,
            invited_by=entity.invited_by,
            status=entity.status.value,
            expires_at=entity.expires_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
