"""Pydantic schemas for GroomingType API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class GroomingTypeCreate(BaseModel):
    """Schema for adding a grooming type to a shop's catalog."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    default_price: int = Field(0, ge=0)


class GroomingTypeUpdate(BaseModel):
    """Schema for updating a grooming type."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    default_price: int | None = Field(None, ge=0)
    is_active: bool | None = None


class GroomingTypeResponse(BaseModel):
    """Schema for GroomingType response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "shop_id": "456e4567-e89b-12d3-a456-426614174000",
                "name": "Full trim",
                "description": "Bath, haircut and nail clipping",
                "default_price": 30000,
                "is_active": True,
                "created_at": "2026-02-01T10:00:00",
                "updated_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    shop_id: UUID
    name: str
    description: str | None = None
    default_price: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class GroomingTypeListResponse(BaseModel):
    """Schema for list of GroomingTypes response."""

    data: list[GroomingTypeResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class GroomingTypeDetailResponse(BaseModel):
    """Schema for a single GroomingType response."""

    data: GroomingTypeResponse
