"""SQLAlchemy implementation of GroomingType repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.grooming_type import GroomingType
from infrastructure.database.models import GroomingTypeModel


class SQLAlchemyGroomingTypeRepository:
    """SQLAlchemy implementation of IGroomingTypeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> GroomingType | None:
        """Get a grooming type by ID, whatever its shop or state."""
        model = await self._session.get(GroomingTypeModel, id)
        return self._to_entity(model) if model else None

    async def list_for_shop(
        self, shop_id: UUID, include_inactive: bool = False
    ) -> list[GroomingType]:
        """Get a shop's catalog ordered by name."""
        stmt = select(GroomingTypeModel).where(GroomingTypeModel.shop_id == shop_id)
        if not include_inactive:
            stmt = stmt.where(GroomingTypeModel.is_active.is_(True))
        stmt = stmt.order_by(GroomingTypeModel.name)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def find_by_name(self, shop_id: UUID, name: str) -> list[GroomingType]:
        """Get the shop's grooming types with exactly this name, active first."""
        stmt = (
            select(GroomingTypeModel)
            .where(
                GroomingTypeModel.shop_id == shop_id,
                GroomingTypeModel.name == name,
            )
            .order_by(GroomingTypeModel.is_active.desc(), GroomingTypeModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, grooming_type: GroomingType) -> GroomingType:
        """Create a new grooming type."""
        model = self._to_model(grooming_type)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, grooming_type: GroomingType) -> GroomingType:
        """Update an existing grooming type."""
        model = await self._session.get(GroomingTypeModel, grooming_type.id)
        if not model:
            raise ValueError(f"Grooming type {grooming_type.id} not found")

        model.name = grooming_type.name
        model.description = grooming_type.description
        model.default_price = grooming_type.default_price
        model.is_active = grooming_type.is_active
        model.updated_at = grooming_type.updated_at

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(self, model: GroomingTypeModel) -> GroomingType:
        """Convert ORM model to domain entity."""
        return GroomingType(
            id=model.id,
            shop_id=model.shop_id,
            name=model.name,
            description=model.description,
            default_price=model.default_price,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: GroomingType) -> GroomingTypeModel:
        """Convert domain entity to ORM model."""
        return GroomingTypeModel(
            id=entity.id,
            shop_id=entity.shop_id,
            name=entity.name,
            description=entity.description,
            default_price=entity.default_price,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
