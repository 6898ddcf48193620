"""Dog domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Dog:
    """Domain entity for a customer's dog."""

    shop_id: UUID
    name: str
    id: UUID = field(default_factory=uuid4)
    breed: str | None = None
    owner_name: str | None = None
    owner_phone_number: str | None = None
    note: str | None = None
    weight: float | None = None
    birth_year: int | None = None
    birth_month: int | None = None
    is_deleted: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def soft_delete(self) -> None:
        """Hide the dog from every read."""
        self.is_deleted = True
        self.updated_at = datetime.utcnow()

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
