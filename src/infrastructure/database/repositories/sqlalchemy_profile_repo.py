"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import AuthProvider, Profile
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        model = await self._session.get(ProfileModel, id)
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by email (case-insensitive)."""
        stmt = select(ProfileModel).where(func.lower(ProfileModel.email) == email.lower().strip())
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        model = await self._session.get(ProfileModel, profile.id)
        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.email = profile.email
        model.name = profile.name
        model.profile_image = profile.profile_image
        model.provider = profile.provider.value
        model.provider_id = profile.provider_id
        model.is_active = profile.is_active
        model.shop_id = profile.shop_id
        model.refresh_token_hash = profile.refresh_token_hash

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            email=model.email,
            name=model.name,
            profile_image=model.profile_image,
            provider=AuthProvider(model.provider),
            provider_id=model.provider_id,
            is_active=model.is_active,
            shop_id=model.shop_id,
            refresh_token_hash=model.refresh_token_hash,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            email=entity.email,
            name=entity.name,
            profile_image=entity.profile_image,
            provider=entity.provider.value,
            provider_id=entity.provider_id,
            is_active=entity.is_active,
            shop_id=entity.shop_id,
            refresh_token_hash=entity.refresh_token_hash,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
