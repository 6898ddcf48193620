"""Appointment API routes."""

from datetime import date
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_appointment_service
from api.v1.schemas.appointment import (
    AppointmentCreate,
    AppointmentDetailResponse,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentUpdate,
)
from core.rate_limit import limiter
from domain.entities.appointment import AppointmentStatus
from domain.services.appointment_service import AppointmentService

# Shop-scoped appointment routes (calendar)
shop_appointments_router = APIRouter(prefix="/shops/{shop_id}/appointments", tags=["appointments"])

# Appointment-scoped routes
appointments_router = APIRouter(prefix="/appointments", tags=["appointments"])

# Fields copied from AppointmentUpdate when the client sent them
_UPDATE_FIELDS = (
    "dog_id",
    "appointment_at",
    "start_time",
    "end_time",
    "assigned_user_id",
    "grooming_type",
    "memo",
    "amount",
)


@shop_appointments_router.get(
    "",
    response_model=AppointmentListResponse,
    summary="List shop appointments",
    responses={400: {"description": "start is after end"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_shop_appointments(
    request: Request,
    shop_id: UUID,
    user: CurrentUser,
    start: date | None = Query(None, description="First day, inclusive"),
    end: date | None = Query(None, description="Last day, inclusive"),
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentListResponse:
    """List a shop's appointments, optionally limited to a date range."""
    details = await service.list_for_shop(shop_id, user.id, start=start, end=end)
    data = [AppointmentResponse.from_detail(d) for d in details]
    return AppointmentListResponse(data=data, meta={"total": len(data)})


@appointments_router.post(
    "",
    response_model=AppointmentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book an appointment",
    responses={
        400: {"description": "Unknown or inactive grooming type"},
        403: {"description": "Not a member, or dog belongs to another shop"},
        404: {"description": "Shop or dog not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_appointment(
    request: Request,
    body: AppointmentCreate,
    user: CurrentUser,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentDetailResponse:
    """Book an appointment.

    `grooming_types` attaches catalog services. A line without
    `applied_price` uses the type's default price. When no `amount` is
    given it is the sum of the line prices.
    """
    service_lines = None
    if body.grooming_types is not None:
        service_lines = [line.to_request() for line in body.grooming_types]

    detail = await service.create(
        shop_id=body.shop_id,
        dog_id=body.dog_id,
        user_id=user.id,
        appointment_at=body.appointment_at,
        start_time=body.start_time,
        end_time=body.end_time,
        assigned_user_id=body.assigned_user_id,
        grooming_type=body.grooming_type,
        memo=body.memo,
        amount=body.amount,
        status=AppointmentStatus(body.status),
        service_lines=service_lines,
    )
    return AppointmentDetailResponse(data=AppointmentResponse.from_detail(detail))


@appointments_router.get(
    "/created-by/me",
    response_model=AppointmentListResponse,
    summary="Appointments I booked",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_my_appointments(
    request: Request,
    user: CurrentUser,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentListResponse:
    """List the appointments the current user booked, across shops."""
    details = await service.list_created_by(user.id)
    data = [AppointmentResponse.from_detail(d) for d in details]
    return AppointmentListResponse(data=data, meta={"total": len(data)})


@appointments_router.get(
    "/{appointment_id}",
    response_model=AppointmentDetailResponse,
    summary="Get an appointment",
    responses={404: {"description": "Appointment not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_appointment(
    request: Request,
    appointment_id: UUID,
    user: CurrentUser,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentDetailResponse:
    """Get an appointment with its grooming services."""
    detail = await service.get(appointment_id, user.id)
    return AppointmentDetailResponse(data=AppointmentResponse.from_detail(detail))


@appointments_router.patch(
    "/{appointment_id}",
    response_model=AppointmentDetailResponse,
    summary="Update an appointment",
    responses={
        400: {"description": "Unknown or inactive grooming type"},
        404: {"description": "Appointment not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_appointment(
    request: Request,
    appointment_id: UUID,
    body: AppointmentUpdate,
    user: CurrentUser,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentDetailResponse:
    """Update an appointment. Only the fields sent are changed.

    Sending `grooming_types` replaces every attached service; an empty
    list removes them all.
    """
    sent = body.model_fields_set
    changes: dict[str, Any] = {name: getattr(body, name) for name in _UPDATE_FIELDS if name in sent}
    # dog and date cannot be cleared
    for required in ("dog_id", "appointment_at"):
        if required in changes and changes[required] is None:
            del changes[required]
    if body.status is not None:
        changes["status"] = AppointmentStatus(body.status)

    service_lines = None
    if "grooming_types" in sent:
        service_lines = [line.to_request() for line in body.grooming_types or []]

    detail = await service.update(
        appointment_id=appointment_id,
        user_id=user.id,
        service_lines=service_lines,
        **changes,
    )
    return AppointmentDetailResponse(data=AppointmentResponse.from_detail(detail))


@appointments_router.delete(
    "/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an appointment",
    responses={404: {"description": "Appointment not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_appointment(
    request: Request,
    appointment_id: UUID,
    user: CurrentUser,
    service: AppointmentService = Depends(get_appointment_service),
) -> None:
    """Delete an appointment and its grooming services."""
    await service.delete(appointment_id, user.id)
    return None
