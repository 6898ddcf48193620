"""Revenue summary value objects."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass
class RevenueSummary:
    """Aggregated appointment revenue for one shop over a period."""

    shop_id: UUID
    start: date
    end: date
    total_amount: int = 0
    settled_amount: int = 0
    appointment_count: int = 0

    @property
    def pending_amount(self) -> int:
        """Revenue not yet settled."""
        return self.total_amount - self.settled_amount
