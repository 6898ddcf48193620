"""Grooming type catalog API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_grooming_type_service
from api.v1.schemas.grooming_type import (
    GroomingTypeCreate,
    GroomingTypeDetailResponse,
    GroomingTypeListResponse,
    GroomingTypeResponse,
    GroomingTypeUpdate,
)
from core.rate_limit import limiter
from domain.services.grooming_type_service import GroomingTypeService

router = APIRouter(prefix="/shops/{shop_id}/grooming-types", tags=["grooming-types"])


@router.get(
    "",
    response_model=GroomingTypeListResponse,
    summary="List grooming types",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_grooming_types(
    request: Request,
    shop_id: UUID,
    user: CurrentUser,
    include_inactive: bool = Query(False, description="Include deactivated types"),
    service: GroomingTypeService = Depends(get_grooming_type_service),
) -> GroomingTypeListResponse:
    """List the shop's grooming services."""
    grooming_types = await service.list_for_shop(shop_id, user.id, include_inactive)
    data = [GroomingTypeResponse.model_validate(gt) for gt in grooming_types]
    return GroomingTypeListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=GroomingTypeDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a grooming type",
    responses={
        403: {"description": "Insufficient permissions (Manager+ only)"},
        409: {"description": "An active type with this name exists"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_grooming_type(
    request: Request,
    shop_id: UUID,
    body: GroomingTypeCreate,
    user: CurrentUser,
    service: GroomingTypeService = Depends(get_grooming_type_service),
) -> GroomingTypeDetailResponse:
    """Add a grooming service to the shop catalog."""
    grooming_type = await service.create(
        shop_id=shop_id,
        user_id=user.id,
        name=body.name,
        description=body.description,
        default_price=body.default_price,
    )
    return GroomingTypeDetailResponse(data=GroomingTypeResponse.model_validate(grooming_type))


@router.patch(
    "/{grooming_type_id}",
    response_model=GroomingTypeDetailResponse,
    summary="Update a grooming type",
    responses={
        403: {"description": "Insufficient permissions (Manager+ only)"},
        404: {"description": "Grooming type not found"},
        409: {"description": "An active type with this name exists"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_grooming_type(
    request: Request,
    shop_id: UUID,
    grooming_type_id: UUID,
    body: GroomingTypeUpdate,
    user: CurrentUser,
    service: GroomingTypeService = Depends(get_grooming_type_service),
) -> GroomingTypeDetailResponse:
    """Update a grooming service. Set `is_active` to true to restore a deleted one."""
    grooming_type = await service.update(
        shop_id=shop_id,
        grooming_type_id=grooming_type_id,
        user_id=user.id,
        name=body.name,
        description=body.description,
        default_price=body.default_price,
        is_active=body.is_active,
    )
    return GroomingTypeDetailResponse(data=GroomingTypeResponse.model_validate(grooming_type))


@router.delete(
    "/{grooming_type_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate a grooming type",
    responses={
        403: {"description": "Insufficient permissions (Manager+ only)"},
        404: {"description": "Grooming type not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_grooming_type(
    request: Request,
    shop_id: UUID,
    grooming_type_id: UUID,
    user: CurrentUser,
    service: GroomingTypeService = Depends(get_grooming_type_service),
) -> None:
    """Remove a grooming service from the catalog. Past appointments keep it."""
    await service.deactivate(shop_id, grooming_type_id, user.id)
    return None
