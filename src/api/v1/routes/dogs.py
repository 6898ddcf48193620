"""Dog (customer) API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_appointment_service, get_dog_service
from api.v1.schemas.appointment import AppointmentListResponse, AppointmentResponse
from api.v1.schemas.dog import (
    DogCreate,
    DogDetailResponse,
    DogListResponse,
    DogResponse,
    DogUpdate,
)
from core.rate_limit import limiter
from domain.services.appointment_service import AppointmentService
from domain.services.dog_service import DogService

# Shop-scoped dog routes (list, search, register)
shop_dogs_router = APIRouter(prefix="/shops/{shop_id}/dogs", tags=["dogs"])

# Dog-scoped routes
dogs_router = APIRouter(prefix="/dogs", tags=["dogs"])


@shop_dogs_router.get(
    "",
    response_model=DogListResponse,
    summary="List dogs",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_dogs(
    request: Request,
    shop_id: UUID,
    user: CurrentUser,
    service: DogService = Depends(get_dog_service),
) -> DogListResponse:
    """List the dogs registered with a shop."""
    dogs = await service.list_for_shop(shop_id, user.id)
    data = [DogResponse.model_validate(dog) for dog in dogs]
    return DogListResponse(data=data, meta={"total": len(data)})


@shop_dogs_router.get(
    "/search",
    response_model=DogListResponse,
    summary="Search dogs by name",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def search_dogs(
    request: Request,
    shop_id: UUID,
    user: CurrentUser,
    q: str = Query("", max_length=100, description="Part of the dog's name"),
    service: DogService = Depends(get_dog_service),
) -> DogListResponse:
    """Find dogs whose name contains `q`, ignoring case. A blank query matches nothing."""
    dogs = await service.search(shop_id, user.id, q)
    data = [DogResponse.model_validate(dog) for dog in dogs]
    return DogListResponse(data=data, meta={"total": len(data)})


@shop_dogs_router.post(
    "",
    response_model=DogDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a dog",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_dog(
    request: Request,
    shop_id: UUID,
    body: DogCreate,
    user: CurrentUser,
    service: DogService = Depends(get_dog_service),
) -> DogDetailResponse:
    """Register a customer's dog with the shop."""
    dog = await service.create(shop_id=shop_id, user_id=user.id, **body.model_dump())
    return DogDetailResponse(data=DogResponse.model_validate(dog))


@dogs_router.get(
    "/{dog_id}",
    response_model=DogDetailResponse,
    summary="Get a dog",
    responses={404: {"description": "Dog not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_dog(
    request: Request,
    dog_id: UUID,
    user: CurrentUser,
    service: DogService = Depends(get_dog_service),
) -> DogDetailResponse:
    """Get a dog by ID."""
    dog = await service.get(dog_id, user.id)
    return DogDetailResponse(data=DogResponse.model_validate(dog))


@dogs_router.patch(
    "/{dog_id}",
    response_model=DogDetailResponse,
    summary="Update a dog",
    responses={404: {"description": "Dog not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_dog(
    request: Request,
    dog_id: UUID,
    body: DogUpdate,
    user: CurrentUser,
    service: DogService = Depends(get_dog_service),
) -> DogDetailResponse:
    """Update a dog. Only the fields sent are changed."""
    dog = await service.update(dog_id, user.id, **body.model_dump(exclude_unset=True))
    return DogDetailResponse(data=DogResponse.model_validate(dog))


@dogs_router.delete(
    "/{dog_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a dog",
    responses={
        400: {"description": "Dog still has active appointments"},
        404: {"description": "Dog not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_dog(
    request: Request,
    dog_id: UUID,
    user: CurrentUser,
    service: DogService = Depends(get_dog_service),
) -> None:
    """Delete a dog. Refused while it has appointments that are not cancelled."""
    await service.delete(dog_id, user.id)
    return None


@dogs_router.get(
    "/{dog_id}/appointments",
    response_model=AppointmentListResponse,
    summary="Dog appointment history",
    responses={404: {"description": "Dog not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_dog_appointments(
    request: Request,
    dog_id: UUID,
    user: CurrentUser,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentListResponse:
    """List every appointment of a dog, newest first."""
    details = await service.list_for_dog(dog_id, user.id)
    data = [AppointmentResponse.from_detail(d) for d in details]
    return AppointmentListResponse(data=data, meta={"total": len(data)})
