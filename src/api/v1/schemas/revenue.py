"""Pydantic schemas for Revenue API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel

from domain.entities.revenue import RevenueSummary


class RevenueSummaryResponse(BaseModel):
    """Revenue for a shop over a period."""

    shop_id: UUID
    start: date
    end: date
    total_amount: int
    settled_amount: int
    pending_amount: int
    appointment_count: int

    @classmethod
    def from_entity(cls, summary: RevenueSummary) -> "RevenueSummaryResponse":
        return cls(
            shop_id=summary.shop_id,
            start=summary.start,
            end=summary.end,
            total_amount=summary.total_amount,
            settled_amount=summary.settled_amount,
            pending_amount=summary.pending_amount,
            appointment_count=summary.appointment_count,
        )
