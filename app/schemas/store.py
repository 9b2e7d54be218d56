# app/schemas/store.py

"""
Pydantic schemas for the Store API
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.base import CamelModel, EntityId, Pagination, canonical_id

CityType = Literal["big", "small"]


class Store(CamelModel):
    """A merchant as stored in the catalog"""
    id: EntityId
    name: str
    description: str = ""
    # Rows written before validation existed may lack a location
    city: Optional[str] = None
    city_type: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _canonical_id(cls, value):
        return canonical_id(value)


class StoreCreate(CamelModel):
    """Request body for creating a store"""
    name: str = Field(..., min_length=1, description="Store name")
    description: str = Field(..., min_length=1, description="Store description")
    city: str = Field(..., min_length=1, description="City the store is located in")
    city_type: CityType = Field(..., description="City type: big or small")
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("name", "description", "city", "address", "phone", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def _lowercase_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class StoreUpdate(StoreCreate):
    """Request body for updating a store; every field is optional"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = Field(None, min_length=1)
    city_type: Optional[CityType] = None


class StoreResponse(CamelModel):
    success: bool = True
    data: Store


class StoreMutationResponse(CamelModel):
    success: bool = True
    message: str
    data: Store


class StoreListResponse(CamelModel):
    success: bool = True
    data: List[Store]
    pagination: Pagination
