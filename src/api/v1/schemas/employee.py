"""Pydantic schemas for Employee API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from domain.entities.shop import ShopMember

ROLE_PATTERN = "^(owner|manager|staff)$"


class EmployeeCreate(BaseModel):
    """Schema for adding an existing user to a shop."""

    user_id: UUID
    role: str = Field("staff", pattern=ROLE_PATTERN)


class EmployeeUpdate(BaseModel):
    """Schema for changing an employee's role."""

    role: str = Field(..., pattern=ROLE_PATTERN)


class EmployeeResponse(BaseModel):
    """Schema for Employee response."""

    id: UUID
    shop_id: UUID
    user_id: UUID
    role: str
    is_active: bool
    email: str | None = None
    name: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, member: ShopMember) -> "EmployeeResponse":
        return cls(
            id=member.id,
            shop_id=member.shop_id,
            user_id=member.user_id,
            role=member.role.label,
            is_active=member.is_active,
            email=member.email,
            name=member.name,
            created_at=member.created_at,
        )


class PaginationMeta(BaseModel):
    """Pagination details for list responses."""

    total: int
    page: int
    limit: int
    total_pages: int


class EmployeeListResponse(BaseModel):
    """Schema for a page of Employees."""

    data: list[EmployeeResponse]
    meta: PaginationMeta


class EmployeeDetailResponse(BaseModel):
    """Schema for a single Employee response."""

    data: EmployeeResponse
