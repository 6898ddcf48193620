"""Shop access checks shared by the domain services."""

from uuid import UUID

from core.exceptions import (
    InsufficientPermissionsError,
    NotAShopMemberError,
    ShopNotFoundError,
)
from domain.entities.shop import Shop, ShopMember, ShopRole, has_permission
from domain.repositories.unit_of_work import IUnitOfWork


async def get_shop_or_raise(uow: IUnitOfWork, shop_id: UUID) -> Shop:
    """Load a shop or raise ShopNotFoundError."""
    shop = await uow.shops.get(shop_id)
    if not shop:
        raise ShopNotFoundError(str(shop_id))
    return shop


async def require_role(
    uow: IUnitOfWork,
    shop_id: UUID,
    user_id: UUID,
    required_role: ShopRole = ShopRole.STAFF,
) -> ShopMember:
    """Verify the user is an active member with at least the required role."""
    member = await uow.shops.get_member(shop_id, user_id)
    if not member or not member.is_active:
        raise NotAShopMemberError(str(shop_id))
    if not has_permission(member.role, required_role):
        raise InsufficientPermissionsError(required_role.label)
    return member


def check_can_grant(actor: ShopMember, role: ShopRole) -> None:
    """Only owners may hand out the owner role."""
    if role == ShopRole.OWNER and actor.role != ShopRole.OWNER:
        raise InsufficientPermissionsError(ShopRole.OWNER.label)
