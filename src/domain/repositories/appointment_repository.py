"""Appointment repository protocol."""

from datetime import date
from typing import Protocol
from uuid import UUID

from domain.entities.appointment import Appointment, AppointmentServiceLine


class IAppointmentRepository(Protocol):
    """Repository interface for Appointment entities and their service lines."""

    async def get(self, id: UUID) -> Appointment | None:
        """Get an appointment by ID."""
        ...

    async def list_for_shop(
        self,
        shop_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Appointment]:
        """Get a shop's appointments in an inclusive date range, newest first."""
        ...

    async def list_for_dog(self, dog_id: UUID) -> list[Appointment]:
        """Get a dog's appointments, newest first."""
        ...

    async def list_created_by(self, user_id: UUID) -> list[Appointment]:
        """Get appointments booked by a user, newest first."""
        ...

    async def count_active_for_dog(self, dog_id: UUID) -> int:
        """Count the dog's appointments that are not cancelled."""
        ...

    async def create(self, appointment: Appointment) -> Appointment:
        """Create a new appointment."""
        ...

    async def update(self, appointment: Appointment) -> Appointment:
        """Update an existing appointment."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete an appointment together with its service lines."""
        ...

    async def get_lines(self, appointment_ids: list[UUID]) -> list[AppointmentServiceLine]:
        """Get service lines (with grooming type names) for several appointments."""
        ...

    async def add_line(self, line: AppointmentServiceLine) -> AppointmentServiceLine:
        """Attach one service line."""
        ...

    async def delete_lines(self, appointment_id: UUID) -> int:
        """Remove every service line of an appointment. Returns the count removed."""
        ...
