"""SQLAlchemy implementation of Shop repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.shop import Shop, ShopMember, ShopRole, ShopWithRole
from infrastructure.database.models import ProfileModel, ShopMemberModel, ShopModel


class SQLAlchemyShopRepository:
    """SQLAlchemy implementation of IShopRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Shop | None:
        """Get a shop by ID."""
        model = await self._session.get(ShopModel, id)
        return self._to_entity(model) if model else None

    async def get_all_for_user(self, user_id: UUID) -> list[ShopWithRole]:
        """Get all shops a user is an active member of, with their role."""
        stmt = (
            select(ShopModel, ShopMemberModel.role)
            .join(ShopMemberModel, ShopMemberModel.shop_id == ShopModel.id)
            .where(
                ShopMemberModel.user_id == user_id,
                ShopMemberModel.is_active.is_(True),
            )
            .order_by(ShopModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [
            ShopWithRole(shop=self._to_entity(model), role=ShopRole.from_label(role))
            for model, role in result.all()
        ]

    async def create(self, shop: Shop) -> Shop:
        """Create a new shop."""
        model = self._to_model(shop)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, shop: Shop) -> Shop:
        """Update an existing shop."""
        model = await self._session.get(ShopModel, shop.id)
        if not model:
            raise ValueError(f"Shop {shop.id} not found")

        model.name = shop.name
        model.address = shop.address
        model.phone = shop.phone
        model.updated_at = shop.updated_at

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a shop and return success status."""
        model = await self._session.get(ShopModel, id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def get_member(self, shop_id: UUID, user_id: UUID) -> ShopMember | None:
        """Get a membership by shop and user IDs."""
        stmt = (
            select(ShopMemberModel, ProfileModel)
            .join(ProfileModel, ProfileModel.id == ShopMemberModel.user_id, isouter=True)
            .where(
                ShopMemberModel.shop_id == shop_id,
                ShopMemberModel.user_id == user_id,
            )
        )
        result = await self._session.execute(stmt)
        row = result.first()
        return self._member_to_entity(row[0], row[1]) if row else None

    async def get_member_by_id(self, member_id: UUID) -> ShopMember | None:
        """Get a membership by its own ID."""
        stmt = (
            select(ShopMemberModel, ProfileModel)
            .join(ProfileModel, ProfileModel.id == ShopMemberModel.user_id, isouter=True)
            .where(ShopMemberModel.id == member_id)
        )
        result = await self._session.execute(stmt)
        row = result.first()
        return self._member_to_entity(row[0], row[1]) if row else None

    async def list_members(self, shop_id: UUID, offset: int, limit: int) -> list[ShopMember]:
        """Get one page of active members, oldest first."""
        stmt = (
            select(ShopMemberModel, ProfileModel)
            .join(ProfileModel, ProfileModel.id == ShopMemberModel.user_id, isouter=True)
            .where(
                ShopMemberModel.shop_id == shop_id,
                ShopMemberModel.is_active.is_(True),
            )
            .order_by(ShopMemberModel.created_at, ShopMemberModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._member_to_entity(member, profile) for member, profile in result.all()]

    async def count_members(self, shop_id: UUID) -> int:
        """Count the active members of a shop."""
        stmt = select(func.count()).where(
            ShopMemberModel.shop_id == shop_id,
            ShopMemberModel.is_active.is_(True),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def count_owners(self, shop_id: UUID) -> int:
        """Count the active owners of a shop."""
        stmt = select(func.count()).where(
            ShopMemberModel.shop_id == shop_id,
            ShopMemberModel.role == ShopRole.OWNER.label,
            ShopMemberModel.is_active.is_(True),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def add_member(self, member: ShopMember) -> ShopMember:
        """Add a member to a shop."""
        model = ShopMemberModel(
            id=member.id,
            shop_id=member.shop_id,
            user_id=member.user_id,
            role=member.role.label,
            is_active=member.is_active,
            created_at=member.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._member_to_entity(model)

    async def update_member(self, member: ShopMember) -> ShopMember:
        """Persist a changed membership (role or active flag)."""
        model = await self._session.get(ShopMemberModel, member.id)
        if not model:
            raise ValueError(f"Shop member {member.id} not found")

        model.role = member.role.label
        model.is_active = member.is_active

        await self._session.flush()
        return self._member_to_entity(model)

    async def remove_member(self, member_id: UUID) -> bool:
        """Remove a membership."""
        model = await self._session.get(ShopMemberModel, member_id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: ShopModel) -> Shop:
        """Convert ORM model to domain entity."""
        return Shop(
            id=model.id,
            name=model.name,
            address=model.address,
            phone=model.phone,
            created_by=model.created_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Shop) -> ShopModel:
        """Convert domain entity to ORM model."""
        return ShopModel(
            id=entity.id,
            name=entity.name,
            address=entity.address,
            phone=entity.phone,
            created_by=entity.created_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _member_to_entity(
        self, model: ShopMemberModel, profile: ProfileModel | None = None
    ) -> ShopMember:
        """Convert membership ORM model to domain entity."""
        return ShopMember(
            id=model.id,
            shop_id=model.shop_id,
            user_id=model.user_id,
            role=ShopRole.from_label(model.role),
            is_active=model.is_active,
            created_at=model.created_at,
            email=profile.email if profile else None,
            name=profile.name if profile else None,
        )
