"""Pydantic schemas for Shop API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.shop import ShopWithRole


class ShopCreate(BaseModel):
    """Schema for creating a Shop."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = Field(None, max_length=500)
    phone: str | None = Field(None, max_length=50)


class ShopUpdate(BaseModel):
    """Schema for updating a Shop."""

    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, max_length=500)
    phone: str | None = Field(None, max_length=50)


class ShopResponse(BaseModel):
    """Schema for Shop response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    address: str | None = None
    phone: str | None = None
    created_by: UUID
    created_at: datetime
    updated_at: datetime
    role: str | None = None

    @classmethod
    def from_entity(cls, item: ShopWithRole) -> "ShopResponse":
        return cls.model_validate(item.shop).model_copy(update={"role": item.role.label})


class ShopListResponse(BaseModel):
    """Schema for list of Shops response."""

    data: list[ShopResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class ShopDetailResponse(BaseModel):
    """Schema for a single Shop response."""

    data: ShopResponse
