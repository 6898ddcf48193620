"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class AuthProvider(StrEnum):
    """Identity provider the profile signed up with."""

    GOOGLE = "google"
    KAKAO = "kakao"
    NAVER = "naver"
    LOCAL = "local"


@dataclass
class Profile:
    """Domain entity for a user profile.

    ``shop_id`` is the user's primary shop: the one the admin UI opens by
    default. Membership itself lives in ``ShopMember``.
    """

    id: UUID = field(default_factory=uuid4)
    email: str = ""
    name: str | None = None
    profile_image: str | None = None
    provider: AuthProvider = AuthProvider.LOCAL
    provider_id: str | None = None
    is_active: bool = True
    shop_id: UUID | None = None
    refresh_token_hash: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
