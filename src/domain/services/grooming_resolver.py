"""Validation and price resolution for appointment service lines."""

from uuid import UUID

import structlog

from core.exceptions import InactiveGroomingTypeError, UnknownGroomingTypeError
from domain.entities.appointment import (
    AppointmentServiceLine,
    ServiceLineRequest,
    ValidatedServiceLine,
)
from domain.entities.grooming_type import GroomingType
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

DISPLAY_LABEL_SEPARATOR = ", "


class AppointmentGroomingResolver:
    """Resolves requested grooming types against a shop's catalog.

    Every method works inside the caller's Unit of Work, so validation and
    the writes that follow share one transaction.
    """

    async def validate_service_lines(
        self,
        uow: IUnitOfWork,
        shop_id: UUID,
        lines: list[ServiceLineRequest],
    ) -> list[ValidatedServiceLine]:
        """Validate every requested line before anything is written.

        Raises:
            UnknownGroomingTypeError: If a type is missing or belongs to another shop.
            InactiveGroomingTypeError: If a type has been deactivated.
        """
        validated: list[ValidatedServiceLine] = []
        for line in lines:
            grooming_type = await uow.grooming_types.get(line.grooming_type_id)
            if grooming_type is None or grooming_type.shop_id != shop_id:
                raise UnknownGroomingTypeError(str(line.grooming_type_id))
            if not grooming_type.is_active:
                raise InactiveGroomingTypeError(str(grooming_type.id), grooming_type.name)

            validated.append(
                ValidatedServiceLine(
                    grooming_type_id=grooming_type.id,
                    grooming_type_name=grooming_type.name,
                    applied_price=self.resolve_price(line.applied_price, grooming_type),
                )
            )
        return validated

    async def attach_to_appointment(
        self,
        uow: IUnitOfWork,
        appointment_id: UUID,
        validated: list[ValidatedServiceLine],
    ) -> list[AppointmentServiceLine]:
        """Insert one service line per validated entry."""
        attached = []
        for entry in validated:
            line = await uow.appointments.add_line(
                AppointmentServiceLine(
                    appointment_id=appointment_id,
                    grooming_type_id=entry.grooming_type_id,
                    applied_price=entry.applied_price,
                )
            )
            line.grooming_type_name = entry.grooming_type_name
            attached.append(line)
        return attached

    async def replace_appointment_lines(
        self,
        uow: IUnitOfWork,
        appointment_id: UUID,
        validated: list[ValidatedServiceLine],
    ) -> list[AppointmentServiceLine]:
        """Swap the appointment's lines for the validated set."""
        await uow.appointments.delete_lines(appointment_id)
        return await self.attach_to_appointment(uow, appointment_id, validated)

    async def absorb_legacy_label(
        self,
        uow: IUnitOfWork,
        shop_id: UUID,
        label: str | None,
    ) -> GroomingType | None:
        """Make sure a free-text grooming label exists in the shop catalog.

        Finds the type by (shop, stripped name) or creates it with a zero
        default price. No service line is attached.
        """
        if label is None or not label.strip():
            return None

        name = label.strip()
        matches = await uow.grooming_types.find_by_name(shop_id, name)
        if matches:
            return matches[0]

        created = await uow.grooming_types.create(
            GroomingType(shop_id=shop_id, name=name, default_price=0)
        )
        logger.info("grooming_type_absorbed", shop_id=str(shop_id), name=name)
        return created

    @staticmethod
    def resolve_price(requested: int | None, grooming_type: GroomingType) -> int:
        """Explicit price if given (zero included), else the catalog default."""
        if requested is not None:
            return requested
        return grooming_type.default_price or 0

    @staticmethod
    def build_display_label(lines: list[AppointmentServiceLine]) -> str | None:
        """Human-readable summary of the attached grooming types."""
        names = [line.grooming_type_name for line in lines if line.grooming_type_name]
        if not names:
            return None
        return DISPLAY_LABEL_SEPARATOR.join(names)
