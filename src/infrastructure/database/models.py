"""SQLAlchemy ORM models."""

from datetime import date, datetime, time
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """User profile model."""

    __tablename__ = "profiles"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(100))
    profile_image: Mapped[str | None] = mapped_column(String(500))
    provider: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "provider IN ('google', 'kakao', 'naver', 'local')",
            name="ck_profiles_provider",
        ),
        nullable=False,
        default="local",
    )
    provider_id: Mapped[str | None] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    shop_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("shops.id", ondelete="SET NULL", use_alter=True),
    )
    refresh_token_hash: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    memberships: Mapped[list["ShopMemberModel"]] = relationship(
        "ShopMemberModel",
        back_populates="user",
        foreign_keys="ShopMemberModel.user_id",
    )


class ShopModel(Base):
    """Grooming shop model."""

    __tablename__ = "shops"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500))
    phone: Mapped[str | None] = mapped_column(String(50))
    created_by: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    members: Mapped[list["ShopMemberModel"]] = relationship(
        "ShopMemberModel",
        back_populates="shop",
        cascade="all, delete-orphan",
    )


class ShopMemberModel(Base):
    """Shop employee model. One row per (shop, user)."""

    __tablename__ = "shop_members"
    __table_args__ = (UniqueConstraint("shop_id", "user_id", name="uq_shop_members_shop_user"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    shop_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("shops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "role IN ('owner', 'manager', 'staff')",
            name="ck_shop_members_role",
        ),
        nullable=False,
        default="staff",
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    shop: Mapped["ShopModel"] = relationship("ShopModel", back_populates="members")
    user: Mapped["ProfileModel"] = relationship(
        "ProfileModel",
        back_populates="memberships",
        foreign_keys=[user_id],
    )


class InvitationModel(Base):
    """Shop staff invitation model."""

    __tablename__ = "invitations"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    shop_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("shops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    invited_by: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    token: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "role IN ('owner', 'manager', 'staff')",
            name="ck_invitations_role",
        ),
        nullable=False,
        default="staff",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "status IN ('pending', 'accepted', 'expired', 'cancelled')",
            name="ck_invitations_status",
        ),
        nullable=False,
        default="pending",
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    shop: Mapped["ShopModel"] = relationship("ShopModel")
    inviter: Mapped["ProfileModel"] = relationship("ProfileModel", foreign_keys=[invited_by])


class GroomingTypeModel(Base):
    """Grooming service catalog entry."""

    __tablename__ = "grooming_types"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    shop_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("shops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    default_price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class DogModel(Base):
    """Customer dog model."""

    __tablename__ = "dogs"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    shop_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("shops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    breed: Mapped[str | None] = mapped_column(String(100))
    owner_name: Mapped[str | None] = mapped_column(String(100))
    owner_phone_number: Mapped[str | None] = mapped_column(String(50))
    note: Mapped[str | None] = mapped_column(Text)
    weight: Mapped[float | None] = mapped_column(Float)
    birth_year: Mapped[int | None] = mapped_column(Integer)
    birth_month: Mapped[int | None] = mapped_column(
        Integer,
        CheckConstraint(
            "birth_month IS NULL OR (birth_month >= 1 AND birth_month <= 12)",
            name="ck_dogs_birth_month",
        ),
    )
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class AppointmentModel(Base):
    """Grooming appointment model."""

    __tablename__ = "appointments"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    shop_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("shops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    dog_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("dogs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_by: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    assigned_user_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="SET NULL"),
    )
    appointment_at: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    start_time: Mapped[time | None] = mapped_column(Time)
    end_time: Mapped[time | None] = mapped_column(Time)
    grooming_type: Mapped[str | None] = mapped_column(String(255))
    memo: Mapped[str | None] = mapped_column(Text)
    amount: Mapped[int | None] = mapped_column(Integer)
    status: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "status IN ('scheduled', 'in_progress', 'completed', 'cancelled', 'settled')",
            name="ck_appointments_status",
        ),
        nullable=False,
        default="scheduled",
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    service_lines: Mapped[list["AppointmentServiceLineModel"]] = relationship(
        "AppointmentServiceLineModel",
        back_populates="appointment",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class AppointmentServiceLineModel(Base):
    """A grooming type attached to an appointment at a booked price."""

    __tablename__ = "appointment_service_lines"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    appointment_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("appointments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    grooming_type_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("grooming_types.id", ondelete="RESTRICT"),
        nullable=False,
    )
    applied_price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    appointment: Mapped["AppointmentModel"] = relationship(
        "AppointmentModel",
        back_populates="service_lines",
    )
    grooming_type: Mapped[Optional["GroomingTypeModel"]] = relationship("GroomingTypeModel")
