"""Pydantic schemas for Dog API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class DogBase(BaseModel):
    """Fields shared by create and update."""

    breed: str | None = Field(None, max_length=100)
    owner_name: str | None = Field(None, max_length=100)
    owner_phone_number: str | None = Field(None, max_length=50)
    note: str | None = None
    weight: float | None = Field(None, ge=0)
    birth_year: int | None = Field(None, ge=1980, le=2100)
    birth_month: int | None = Field(None, ge=1, le=12)


class DogCreate(DogBase):
    """Schema for registering a Dog."""

    name: str = Field(..., min_length=1, max_length=100)


class DogUpdate(DogBase):
    """Schema for updating a Dog. Only fields sent are changed."""

    name: str | None = Field(None, min_length=1, max_length=100)


class DogResponse(BaseModel):
    """Schema for Dog response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    shop_id: UUID
    name: str
    breed: str | None = None
    owner_name: str | None = None
    owner_phone_number: str | None = None
    note: str | None = None
    weight: float | None = None
    birth_year: int | None = None
    birth_month: int | None = None
    created_at: datetime
    updated_at: datetime


class DogListResponse(BaseModel):
    """Schema for list of Dogs response."""

    data: list[DogResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class DogDetailResponse(BaseModel):
    """Schema for a single Dog response."""

    data: DogResponse
