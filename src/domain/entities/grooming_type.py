"""Grooming service type domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class GroomingType:
    """A service a shop offers (bath, full trim, nail clipping, ...).

    Deletion is logical: deactivated types stay referenced by past
    appointments but cannot be attached to new ones.
    """

    shop_id: UUID
    name: str
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    default_price: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def deactivate(self) -> None:
        """Retire the type from the catalog."""
        self.is_active = False
        self.updated_at = datetime.utcnow()
