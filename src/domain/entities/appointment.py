"""Appointment domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import StrEnum
from uuid import UUID, uuid4

from domain.entities.dog import Dog


class AppointmentStatus(StrEnum):
    """Lifecycle status of an appointment."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    SETTLED = "settled"


@dataclass
class Appointment:
    """Domain entity for a grooming appointment."""

    shop_id: UUID
    dog_id: UUID
    created_by: UUID
    appointment_at: date
    id: UUID = field(default_factory=uuid4)
    assigned_user_id: UUID | None = None
    start_time: time | None = None
    end_time: time | None = None
    # Legacy free-text label kept for older clients.
    grooming_type: str | None = None
    memo: str | None = None
    amount: int | None = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class AppointmentServiceLine:
    """A grooming type attached to an appointment at a fixed price."""

    appointment_id: UUID
    grooming_type_id: UUID
    applied_price: int
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    # Filled in by repositories that join the grooming type.
    grooming_type_name: str | None = None


@dataclass
class ServiceLineRequest:
    """A line item as requested by a client."""

    grooming_type_id: UUID
    applied_price: int | None = None


@dataclass
class ValidatedServiceLine:
    """A request line resolved against the shop catalog."""

    grooming_type_id: UUID
    grooming_type_name: str
    applied_price: int


@dataclass
class AppointmentDetail:
    """An appointment with its service lines and derived label."""

    appointment: Appointment
    service_lines: list[AppointmentServiceLine] = field(default_factory=list)
    display_label: str | None = None
    dog: Dog | None = None

    @property
    def effective_amount(self) -> int:
        """Stored amount, or the sum of line prices when none was set."""
        if self.appointment.amount is not None:
            return self.appointment.amount
        return sum(line.applied_price for line in self.service_lines)
