"""Appointment service layer with business logic."""

from collections.abc import Callable
from datetime import date, datetime, time
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import (
    AppointmentNotFoundError,
    AssigneeNotInShopError,
    DogNotFoundError,
    DogNotInShopError,
)
from domain.entities.appointment import (
    Appointment,
    AppointmentDetail,
    AppointmentServiceLine,
    AppointmentStatus,
    ServiceLineRequest,
)
from domain.entities.dog import Dog
from domain.entities.shop import ShopRole
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access import get_shop_or_raise, require_role
from domain.services.grooming_resolver import AppointmentGroomingResolver

logger = structlog.get_logger()

# Sentinel distinguishing "not provided" from an explicit None in partial updates
_UNSET: Any = ...


class AppointmentService:
    """Service layer for grooming appointments."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        resolver: AppointmentGroomingResolver | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._resolver = resolver or AppointmentGroomingResolver()

    async def create(
        self,
        shop_id: UUID,
        dog_id: UUID,
        user_id: UUID,
        appointment_at: date,
        start_time: time | None = None,
        end_time: time | None = None,
        assigned_user_id: UUID | None = None,
        grooming_type: str | None = None,
        memo: str | None = None,
        amount: int | None = None,
        status: AppointmentStatus = AppointmentStatus.SCHEDULED,
        service_lines: list[ServiceLineRequest] | None = None,
    ) -> AppointmentDetail:
        """Book an appointment, attaching validated service lines.

        When lines are given and no amount is, the amount is the sum of the
        applied prices.

        Raises:
            ShopNotFoundError: If the shop does not exist.
            NotAShopMemberError: If the user is not a member of the shop.
            DogNotFoundError: If the dog does not exist.
            DogNotInShopError: If the dog belongs to another shop.
            UnknownGroomingTypeError: If a line names a foreign or missing type.
            InactiveGroomingTypeError: If a line names a deactivated type.
            AssigneeNotInShopError: If the assignee is not an employee of the shop.
        """
        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.STAFF)
            dog = await self._get_dog_in_shop(uow, dog_id, shop_id)
            await self._check_assignee(uow, shop_id, assigned_user_id)

            validated = await self._resolver.validate_service_lines(
                uow, shop_id, service_lines or []
            )
            await self._resolver.absorb_legacy_label(uow, shop_id, grooming_type)

            if amount is None and service_lines:
                amount = sum(entry.applied_price for entry in validated)

            appointment = Appointment(
                shop_id=shop_id,
                dog_id=dog_id,
                created_by=user_id,
                assigned_user_id=assigned_user_id,
                appointment_at=appointment_at,
                start_time=start_time,
                end_time=end_time,
                grooming_type=grooming_type,
                memo=memo,
                amount=amount,
                status=status,
            )
            created = await uow.appointments.create(appointment)
            lines = await self._resolver.attach_to_appointment(uow, created.id, validated)

            await uow.commit()
            logger.info(
                "appointment_created",
                shop_id=str(shop_id),
                appointment_id=str(created.id),
                service_lines=len(lines),
            )
            return self._to_detail(created, lines, dog)

    async def update(
        self,
        appointment_id: UUID,
        user_id: UUID,
        dog_id: UUID = _UNSET,
        appointment_at: date = _UNSET,
        start_time: time | None = _UNSET,
        end_time: time | None = _UNSET,
        assigned_user_id: UUID | None = _UNSET,
        grooming_type: str | None = _UNSET,
        memo: str | None = _UNSET,
        amount: int | None = _UNSET,
        status: AppointmentStatus = _UNSET,
        service_lines: list[ServiceLineRequest] | None = None,
    ) -> AppointmentDetail:
        """Partially update an appointment.

        ``service_lines=None`` leaves the lines untouched; a list, even an
        empty one, replaces them in the same transaction. A stored amount that
        was derived from the old lines follows the new ones unless an amount
        is passed.
        """
        async with self._uow_factory() as uow:
            appointment = await self._get_or_raise(uow, appointment_id)
            await require_role(uow, appointment.shop_id, user_id, ShopRole.STAFF)

            if dog_id is not _UNSET and dog_id != appointment.dog_id:
                await self._get_dog_in_shop(uow, dog_id, appointment.shop_id)
                appointment.dog_id = dog_id

            validated = None
            if service_lines is not None:
                validated = await self._resolver.validate_service_lines(
                    uow, appointment.shop_id, service_lines
                )

            if grooming_type is not _UNSET:
                await self._resolver.absorb_legacy_label(uow, appointment.shop_id, grooming_type)
                appointment.grooming_type = grooming_type
            if appointment_at is not _UNSET:
                appointment.appointment_at = appointment_at
            if start_time is not _UNSET:
                appointment.start_time = start_time
            if end_time is not _UNSET:
                appointment.end_time = end_time
            if assigned_user_id is not _UNSET:
                await self._check_assignee(uow, appointment.shop_id, assigned_user_id)
                appointment.assigned_user_id = assigned_user_id
            if memo is not _UNSET:
                appointment.memo = memo
            if amount is not _UNSET:
                appointment.amount = amount
            elif validated is not None and appointment.amount is not None:
                old_lines = await uow.appointments.get_lines([appointment_id])
                derived = sum(line.applied_price for line in old_lines)
                if old_lines and appointment.amount == derived:
                    appointment.amount = sum(entry.applied_price for entry in validated) or None
            if status is not _UNSET:
                appointment.status = status

            appointment.updated_at = datetime.utcnow()
            updated = await uow.appointments.update(appointment)

            if validated is not None:
                await self._resolver.replace_appointment_lines(uow, appointment_id, validated)

            await uow.commit()
            logger.info("appointment_updated", appointment_id=str(appointment_id))
            return await self._load_detail(uow, updated)

    async def get(self, appointment_id: UUID, user_id: UUID) -> AppointmentDetail:
        """Get one appointment. Requires membership in its shop."""
        async with self._uow_factory() as uow:
            appointment = await self._get_or_raise(uow, appointment_id)
            await require_role(uow, appointment.shop_id, user_id, ShopRole.STAFF)
            return await self._load_detail(uow, appointment)

    async def delete(self, appointment_id: UUID, user_id: UUID) -> bool:
        """Delete an appointment and its service lines."""
        async with self._uow_factory() as uow:
            appointment = await self._get_or_raise(uow, appointment_id)
            await require_role(uow, appointment.shop_id, user_id, ShopRole.STAFF)

            deleted = await uow.appointments.delete(appointment_id)
            await uow.commit()
            logger.info("appointment_deleted", appointment_id=str(appointment_id))
            return deleted  # type: ignore[no-any-return]

    async def list_for_shop(
        self,
        shop_id: UUID,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> list[AppointmentDetail]:
        """List a shop's appointments, optionally within an inclusive date range."""
        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.STAFF)
            appointments = await uow.appointments.list_for_shop(shop_id, start, end)
            return await self._load_details(uow, appointments)

    async def list_for_dog(self, dog_id: UUID, user_id: UUID) -> list[AppointmentDetail]:
        """A dog's appointment history, newest first."""
        async with self._uow_factory() as uow:
            dog = await uow.dogs.get(dog_id)
            if not dog or dog.is_deleted:
                raise DogNotFoundError(str(dog_id))
            await require_role(uow, dog.shop_id, user_id, ShopRole.STAFF)
            appointments = await uow.appointments.list_for_dog(dog_id)
            return await self._load_details(uow, appointments)

    async def list_created_by(self, user_id: UUID) -> list[AppointmentDetail]:
        """Appointments the user booked, across the shops they still work at."""
        async with self._uow_factory() as uow:
            memberships = await uow.shops.get_all_for_user(user_id)
            shop_ids = {entry.shop.id for entry in memberships}
            appointments = [
                appointment
                for appointment in await uow.appointments.list_created_by(user_id)
                if appointment.shop_id in shop_ids
            ]
            return await self._load_details(uow, appointments)

    # --- Internal helpers ---

    async def _get_or_raise(self, uow: IUnitOfWork, appointment_id: UUID) -> Appointment:
        appointment = await uow.appointments.get(appointment_id)
        if not appointment:
            raise AppointmentNotFoundError(str(appointment_id))
        return appointment

    async def _check_assignee(
        self, uow: IUnitOfWork, shop_id: UUID, assigned_user_id: UUID | None
    ) -> None:
        if assigned_user_id is None:
            return
        member = await uow.shops.get_member(shop_id, assigned_user_id)
        if not member or not member.is_active:
            raise AssigneeNotInShopError(str(assigned_user_id), str(shop_id))

    async def _get_dog_in_shop(self, uow: IUnitOfWork, dog_id: UUID, shop_id: UUID) -> Dog:
        dog = await uow.dogs.get(dog_id)
        if not dog or dog.is_deleted:
            raise DogNotFoundError(str(dog_id))
        if dog.shop_id != shop_id:
            raise DogNotInShopError(str(dog_id), str(shop_id))
        return dog

    async def _load_detail(self, uow: IUnitOfWork, appointment: Appointment) -> AppointmentDetail:
        details = await self._load_details(uow, [appointment])
        return details[0]

    async def _load_details(
        self, uow: IUnitOfWork, appointments: list[Appointment]
    ) -> list[AppointmentDetail]:
        """Bundle appointments with their service lines and dogs."""
        if not appointments:
            return []

        lines = await uow.appointments.get_lines([a.id for a in appointments])
        lines_by_appointment: dict[UUID, list[AppointmentServiceLine]] = {}
        for line in lines:
            lines_by_appointment.setdefault(line.appointment_id, []).append(line)

        dogs: dict[UUID, Dog | None] = {}
        for appointment in appointments:
            if appointment.dog_id not in dogs:
                dogs[appointment.dog_id] = await uow.dogs.get(appointment.dog_id)

        return [
            self._to_detail(
                appointment,
                lines_by_appointment.get(appointment.id, []),
                dogs[appointment.dog_id],
            )
            for appointment in appointments
        ]

    def _to_detail(
        self,
        appointment: Appointment,
        lines: list[AppointmentServiceLine],
        dog: Dog | None,
    ) -> AppointmentDetail:
        return AppointmentDetail(
            appointment=appointment,
            service_lines=lines,
            display_label=self._resolver.build_display_label(lines),
            dog=dog,
        )
