"""Revenue summaries per shop and period."""

from collections.abc import Callable
from datetime import date
from uuid import UUID

from core.exceptions import InvalidPeriodError
from domain.entities.appointment import AppointmentStatus
from domain.entities.revenue import RevenueSummary
from domain.entities.shop import ShopRole
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access import get_shop_or_raise, require_role


class RevenueService:
    """Computes revenue from appointments. Nothing is cached or stored."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def summarize(
        self,
        shop_id: UUID,
        user_id: UUID,
        start: date,
        end: date,
    ) -> RevenueSummary:
        """Sum appointment amounts in ``[start, end]``, skipping cancelled ones.

        An appointment without an amount counts the sum of its service line
        prices instead.

        Raises:
            InvalidPeriodError: If start is after end.
        """
        if start > end:
            raise InvalidPeriodError(start.isoformat(), end.isoformat())

        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.STAFF)

            appointments = [
                a
                for a in await uow.appointments.list_for_shop(shop_id, start, end)
                if a.status != AppointmentStatus.CANCELLED
            ]

            line_totals: dict[UUID, int] = {}
            unpriced = [a.id for a in appointments if a.amount is None]
            if unpriced:
                for line in await uow.appointments.get_lines(unpriced):
                    line_totals[line.appointment_id] = (
                        line_totals.get(line.appointment_id, 0) + line.applied_price
                    )

            summary = RevenueSummary(shop_id=shop_id, start=start, end=end)
            for appointment in appointments:
                amount = (
                    appointment.amount
                    if appointment.amount is not None
                    else line_totals.get(appointment.id, 0)
                )
                summary.total_amount += amount
                if appointment.status == AppointmentStatus.SETTLED:
                    summary.settled_amount += amount
                summary.appointment_count += 1

            return summary
