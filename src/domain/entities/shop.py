"""Shop and shop membership domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from uuid import UUID, uuid4


class ShopRole(IntEnum):
    """Shop role hierarchy. Higher value = more permissions.

    Use >= comparison for permission checks:
        member_role >= ShopRole.MANAGER  # True if Manager or Owner
    """

    STAFF = 10
    MANAGER = 20
    OWNER = 30

    @property
    def label(self) -> str:
        """Lower-case name used on the wire and in storage."""
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "ShopRole":
        """Parse a lower-case role name."""
        return cls[label.upper()]


def has_permission(user_role: ShopRole, required_role: ShopRole) -> bool:
    """Check if a member role meets the required permission level."""
    return user_role >= required_role


@dataclass
class Shop:
    """Domain entity for a grooming shop (the tenant)."""

    name: str
    created_by: UUID
    id: UUID = field(default_factory=uuid4)
    address: str | None = None
    phone: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass
class ShopMember:
    """Domain entity for an employee of a shop."""

    shop_id: UUID
    user_id: UUID
    role: ShopRole = ShopRole.STAFF
    id: UUID = field(default_factory=uuid4)
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    # Populated by repositories that join the profile; not persisted here.
    email: str | None = None
    name: str | None = None


@dataclass
class ShopWithRole:
    """A shop together with the requesting user's role in it."""

    shop: Shop
    role: ShopRole
