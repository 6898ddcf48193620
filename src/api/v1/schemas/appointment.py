"""Pydantic schemas for Appointment API."""

from datetime import date, datetime, time
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from api.v1.schemas.dog import DogResponse
from domain.entities.appointment import AppointmentDetail, ServiceLineRequest

STATUS_PATTERN = "^(scheduled|in_progress|completed|cancelled|settled)$"


class ServiceLineInput(BaseModel):
    """A grooming type requested for an appointment."""

    grooming_type_id: UUID
    applied_price: int | None = Field(None, ge=0)

    def to_request(self) -> ServiceLineRequest:
        return ServiceLineRequest(
            grooming_type_id=self.grooming_type_id,
            applied_price=self.applied_price,
        )


class AppointmentBase(BaseModel):
    """Fields shared by create and update."""

    start_time: time | None = None
    end_time: time | None = None
    assigned_user_id: UUID | None = None
    grooming_type: str | None = Field(
        None,
        max_length=255,
        description="Legacy free-text label. Prefer grooming_types.",
    )
    memo: str | None = None
    amount: int | None = Field(None, ge=0)

    @model_validator(mode="after")
    def check_times(self) -> "AppointmentBase":
        if self.start_time and self.end_time and self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self


class AppointmentCreate(AppointmentBase):
    """Schema for booking an appointment."""

    shop_id: UUID
    dog_id: UUID
    appointment_at: date
    status: str = Field("scheduled", pattern=STATUS_PATTERN)
    grooming_types: list[ServiceLineInput] | None = None


class AppointmentUpdate(AppointmentBase):
    """Schema for updating an appointment. Only fields sent are changed.

    Omitting ``grooming_types`` keeps the current lines; sending a list,
    even an empty one, replaces them.
    """

    dog_id: UUID | None = None
    appointment_at: date | None = None
    status: str | None = Field(None, pattern=STATUS_PATTERN)
    grooming_types: list[ServiceLineInput] | None = None


class ServiceLineResponse(BaseModel):
    """A grooming type attached to an appointment."""

    id: UUID
    grooming_type_id: UUID
    name: str | None = None
    applied_price: int


class AppointmentResponse(BaseModel):
    """Schema for Appointment response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "shop_id": "456e4567-e89b-12d3-a456-426614174000",
                "dog_id": "789e4567-e89b-12d3-a456-426614174000",
                "appointment_at": "2026-03-02",
                "start_time": "10:00:00",
                "end_time": "11:30:00",
                "status": "scheduled",
                "amount": 45000,
                "grooming_types": [
                    {
                        "id": "aaae4567-e89b-12d3-a456-426614174000",
                        "grooming_type_id": "bbbe4567-e89b-12d3-a456-426614174000",
                        "name": "Bath",
                        "applied_price": 15000,
                    }
                ],
                "grooming_type_display": "Bath, Full trim",
            }
        },
    )

    id: UUID
    shop_id: UUID
    dog_id: UUID
    created_by: UUID
    assigned_user_id: UUID | None = None
    appointment_at: date
    start_time: time | None = None
    end_time: time | None = None
    grooming_type: str | None = None
    memo: str | None = None
    amount: int | None = None
    status: str
    grooming_types: list[ServiceLineResponse] = Field(default_factory=list)
    grooming_type_display: str | None = None
    dog: DogResponse | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_detail(cls, detail: AppointmentDetail) -> "AppointmentResponse":
        appointment = detail.appointment
        return cls(
            id=appointment.id,
            shop_id=appointment.shop_id,
            dog_id=appointment.dog_id,
            created_by=appointment.created_by,
            assigned_user_id=appointment.assigned_user_id,
            appointment_at=appointment.appointment_at,
            start_time=appointment.start_time,
            end_time=appointment.end_time,
            grooming_type=appointment.grooming_type,
            memo=appointment.memo,
            amount=appointment.amount,
            status=appointment.status.value,
            grooming_types=[
                ServiceLineResponse(
                    id=line.id,
                    grooming_type_id=line.grooming_type_id,
                    name=line.grooming_type_name,
                    applied_price=line.applied_price,
                )
                for line in detail.service_lines
            ],
            grooming_type_display=detail.display_label,
            dog=DogResponse.model_validate(detail.dog) if detail.dog else None,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )


class AppointmentListResponse(BaseModel):
    """Schema for list of Appointments response."""

    data: list[AppointmentResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class AppointmentDetailResponse(BaseModel):
    """Schema for a single Appointment response."""

    data: AppointmentResponse
