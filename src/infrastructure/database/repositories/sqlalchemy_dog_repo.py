"""SQLAlchemy implementation of Dog repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.dog import Dog
from infrastructure.database.models import DogModel

# Columns copied verbatim between entity and model
_FIELDS = (
    "id",
    "shop_id",
    "name",
    "breed",
    "owner_name",
    "owner_phone_number",
    "note",
    "weight",
    "birth_year",
    "birth_month",
    "is_deleted",
    "created_at",
    "updated_at",
)


class SQLAlchemyDogRepository:
    """SQLAlchemy implementation of IDogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Dog | None:
        """Get a dog by ID."""
        model = await self._session.get(DogModel, id)
        return self._to_entity(model) if model else None

    async def list_for_shop(self, shop_id: UUID) -> list[Dog]:
        """Get the shop's dogs ordered by name."""
        stmt = (
            select(DogModel)
            .where(DogModel.shop_id == shop_id, DogModel.is_deleted.is_(False))
            .order_by(DogModel.name, DogModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def search(self, shop_id: UUID, query: str) -> list[Dog]:
        """Case-insensitive substring search on dog name. Wildcards match literally."""
        stmt = (
            select(DogModel)
            .where(
                DogModel.shop_id == shop_id,
                DogModel.is_deleted.is_(False),
                func.lower(DogModel.name).contains(query.lower(), autoescape=True),
            )
            .order_by(DogModel.name)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, dog: Dog) -> Dog:
        """Create a new dog."""
        model = self._to_model(dog)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, dog: Dog) -> Dog:
        """Update an existing dog."""
        model = await self._session.get(DogModel, dog.id)
        if not model:
            raise ValueError(f"Dog {dog.id} not found")

        for name in _FIELDS:
            if name not in ("id", "shop_id", "created_at"):
                setattr(model, name, getattr(dog, name))

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(self, model: DogModel) -> Dog:
        """Convert ORM model to domain entity."""
        return Dog(**{name: getattr(model, name) for name in _FIELDS})

    def _to_model(self, entity: Dog) -> DogModel:
        """Convert domain entity to ORM model."""
        return DogModel(**{name: getattr(entity, name) for name in _FIELDS})
