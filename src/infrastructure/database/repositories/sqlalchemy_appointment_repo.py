"""SQLAlchemy implementation of Appointment repository."""

from datetime import date
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.appointment import (
    Appointment,
    AppointmentServiceLine,
    AppointmentStatus,
)
from infrastructure.database.models import (
    AppointmentModel,
    AppointmentServiceLineModel,
    GroomingTypeModel,
)


class SQLAlchemyAppointmentRepository:
    """SQLAlchemy implementation of IAppointmentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Appointment | None:
        """Get an appointment by ID."""
        model = await self._session.get(AppointmentModel, id)
        return self._to_entity(model) if model else None

    async def list_for_shop(
        self,
        shop_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> list[Appointment]:
        """Get a shop's appointments in an inclusive date range, newest first."""
        stmt = select(AppointmentModel).where(AppointmentModel.shop_id == shop_id)
        if start is not None:
            stmt = stmt.where(AppointmentModel.appointment_at >= start)
        if end is not None:
            stmt = stmt.where(AppointmentModel.appointment_at <= end)
        result = await self._session.execute(self._newest_first(stmt))
        return [self._to_entity(model) for model in result.scalars()]

    async def list_for_dog(self, dog_id: UUID) -> list[Appointment]:
        """Get a dog's appointments, newest first."""
        stmt = select(AppointmentModel).where(AppointmentModel.dog_id == dog_id)
        result = await self._session.execute(self._newest_first(stmt))
        return [self._to_entity(model) for model in result.scalars()]

    async def list_created_by(self, user_id: UUID) -> list[Appointment]:
        """Get appointments booked by a user, newest first."""
        stmt = select(AppointmentModel).where(AppointmentModel.created_by == user_id)
        result = await self._session.execute(self._newest_first(stmt))
        return [self._to_entity(model) for model in result.scalars()]

    async def count_active_for_dog(self, dog_id: UUID) -> int:
        """Count the dog's appointments that are not cancelled."""
        stmt = select(func.count()).where(
            AppointmentModel.dog_id == dog_id,
            AppointmentModel.status != AppointmentStatus.CANCELLED.value,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def create(self, appointment: Appointment) -> Appointment:
        """Create a new appointment."""
        model = self._to_model(appointment)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, appointment: Appointment) -> Appointment:
        """Update an existing appointment."""
        model = await self._session.get(AppointmentModel, appointment.id)
        if not model:
            raise ValueError(f"Appointment {appointment.id} not found")

        model.dog_id = appointment.dog_id
        model.assigned_user_id = appointment.assigned_user_id
        model.appointment_at = appointment.appointment_at
        model.start_time = appointment.start_time
        model.end_time = appointment.end_time
        model.grooming_type = appointment.grooming_type
        model.memo = appointment.memo
        model.amount = appointment.amount
        model.status = appointment.status.value
        model.updated_at = appointment.updated_at

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete an appointment together with its service lines."""
        model = await self._session.get(AppointmentModel, id)
        if not model:
            return False

        await self.delete_lines(id)
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def get_lines(self, appointment_ids: list[UUID]) -> list[AppointmentServiceLine]:
        """Get service lines (with grooming type names) for several appointments."""
        if not appointment_ids:
            return []

        stmt = (
            select(AppointmentServiceLineModel, GroomingTypeModel.name)
            .join(
                GroomingTypeModel,
                GroomingTypeModel.id == AppointmentServiceLineModel.grooming_type_id,
                isouter=True,
            )
            .where(AppointmentServiceLineModel.appointment_id.in_(appointment_ids))
            .order_by(AppointmentServiceLineModel.created_at, AppointmentServiceLineModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._line_to_entity(line, name) for line, name in result.all()]

    async def add_line(self, line: AppointmentServiceLine) -> AppointmentServiceLine:
        """Attach one service line."""
        model = AppointmentServiceLineModel(
            id=line.id,
            appointment_id=line.appointment_id,
            grooming_type_id=line.grooming_type_id,
            applied_price=line.applied_price,
            created_at=line.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._line_to_entity(model, line.grooming_type_name)

    async def delete_lines(self, appointment_id: UUID) -> int:
        """Remove every service line of an appointment. Returns the count removed."""
        stmt = delete(AppointmentServiceLineModel).where(
            AppointmentServiceLineModel.appointment_id == appointment_id
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount  # type: ignore[attr-defined, no-any-return]

    @staticmethod
    def _newest_first(stmt: Select[tuple[AppointmentModel]]) -> Select[tuple[AppointmentModel]]:
        return stmt.order_by(
            AppointmentModel.appointment_at.desc(),
            AppointmentModel.start_time.desc(),
            AppointmentModel.created_at.desc(),
        )

    def _to_entity(self, model: AppointmentModel) -> Appointment:
        """Convert ORM model to domain entity."""
        return Appointment(
            id=model.id,
            shop_id=model.shop_id,
            dog_id=model.dog_id,
            created_by=model.created_by,
            assigned_user_id=model.assigned_user_id,
            appointment_at=model.appointment_at,
            start_time=model.start_time,
            end_time=model.end_time,
            grooming_type=model.grooming_type,
            memo=model.memo,
            amount=model.amount,
            status=AppointmentStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Appointment) -> AppointmentModel:
        """Convert domain entity to ORM model."""
        return AppointmentModel(
            id=entity.id,
            shop_id=entity.shop_id,
            dog_id=entity.dog_id,
            created_by=entity.created_by,
            assigned_user_id=entity.assigned_user_id,
            appointment_at=entity.appointment_at,
            start_time=entity.start_time,
            end_time=entity.end_time,
            grooming_type=entity.grooming_type,
            memo=entity.memo,
            amount=entity.amount,
            status=entity.status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _line_to_entity(
        self, model: AppointmentServiceLineModel, grooming_type_name: str | None
    ) -> AppointmentServiceLine:
        """Convert service line ORM model to domain entity."""
        return AppointmentServiceLine(
            id=model.id,
            appointment_id=model.appointment_id,
            grooming_type_id=model.grooming_type_id,
            applied_price=model.applied_price,
            created_at=model.created_at,
            grooming_type_name=grooming_type_name,
        )
