"""Shop API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_shop_service
from api.v1.schemas.shop import (
    ShopCreate,
    ShopDetailResponse,
    ShopListResponse,
    ShopResponse,
    ShopUpdate,
)
from core.rate_limit import limiter
from domain.entities.shop import ShopRole, ShopWithRole
from domain.services.shop_service import ShopService

router = APIRouter(prefix="/shops", tags=["shops"])


@router.get(
    "",
    response_model=ShopListResponse,
    summary="List my shops",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_shops(
    request: Request,
    user: CurrentUser,
    service: ShopService = Depends(get_shop_service),
) -> ShopListResponse:
    """List every shop the current user works at, with their role."""
    shops = await service.list_for_user(user.id)
    data = [ShopResponse.from_entity(item) for item in shops]
    return ShopListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=ShopDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a shop",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_shop(
    request: Request,
    body: ShopCreate,
    user: CurrentUser,
    service: ShopService = Depends(get_shop_service),
) -> ShopDetailResponse:
    """Create a shop. The creator becomes its owner."""
    shop = await service.create(
        user_id=user.id,
        name=body.name,
        address=body.address,
        phone=body.phone,
    )
    return ShopDetailResponse(
        data=ShopResponse.from_entity(ShopWithRole(shop=shop, role=ShopRole.OWNER))
    )


@router.get(
    "/{shop_id}",
    response_model=ShopDetailResponse,
    summary="Get a shop",
    responses={
        403: {"description": "Not a member"},
        404: {"description": "Shop not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_shop(
    request: Request,
    shop_id: UUID,
    user: CurrentUser,
    service: ShopService = Depends(get_shop_service),
) -> ShopDetailResponse:
    """Get a shop the current user works at."""
    item = await service.get(shop_id, user.id)
    return ShopDetailResponse(data=ShopResponse.from_entity(item))


@router.patch(
    "/{shop_id}",
    response_model=ShopDetailResponse,
    summary="Update a shop",
    responses={
        403: {"description": "Insufficient permissions (Manager+ only)"},
        404: {"description": "Shop not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_shop(
    request: Request,
    shop_id: UUID,
    body: ShopUpdate,
    user: CurrentUser,
    service: ShopService = Depends(get_shop_service),
) -> ShopDetailResponse:
    """Update shop details. Requires Manager+ role."""
    shop = await service.update(
        shop_id=shop_id,
        user_id=user.id,
        name=body.name,
        address=body.address,
        phone=body.phone,
    )
    item = await service.get(shop.id, user.id)
    return ShopDetailResponse(data=ShopResponse.from_entity(item))


@router.delete(
    "/{shop_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a shop",
    responses={
        400: {"description": "Shop still has employees"},
        403: {"description": "Insufficient permissions (Owner only)"},
        404: {"description": "Shop not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_shop(
    request: Request,
    shop_id: UUID,
    user: CurrentUser,
    service: ShopService = Depends(get_shop_service),
) -> None:
    """Delete a shop. Only owners can delete, and only once all employees are gone."""
    await service.delete(shop_id, user.id)
    return None
