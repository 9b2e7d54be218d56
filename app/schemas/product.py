# app/schemas/product.py

"""
Pydantic schemas for the Product API
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from app.schemas.base import CamelModel, EntityId, Pagination, canonical_id

UNCATEGORIZED = "Uncategorized"

_url_adapter = TypeAdapter(HttpUrl)


def _blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class Product(CamelModel):
    """A product owned by exactly one store"""
    id: EntityId
    name: str
    description: str = ""
    price: float = Field(..., ge=0)
    store: EntityId
    category: Optional[str] = None
    stock: int = Field(0, ge=0)
    image_url: Optional[str] = None
    is_available: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", "store", mode="before")
    @classmethod
    def _canonical_id(cls, value):
        return canonical_id(value)

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category(cls, value):
        return _blank_to_none(value)

    @property
    def category_label(self) -> str:
        """Category used in statistics; products without one are grouped as Uncategorized."""
        return self.category or UNCATEGORIZED


class ProductCreate(CamelModel):
    """Request body for creating a product"""
    name: str = Field(..., min_length=1, description="Product name")
    description: str = Field(..., min_length=1, description="Product description")
    price: float = Field(..., ge=0, description="Price, must be positive")
    category: Optional[str] = None
    stock: int = Field(0, ge=0, description="Units in stock")
    image_url: Optional[str] = Field(None, description="Image URL, empty string clears it")

    @field_validator("name", "description", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category(cls, value):
        return _blank_to_none(value)

    @field_validator("image_url")
    @classmethod
    def _valid_url(cls, value):
        if value:
            try:
                _url_adapter.validate_python(value)
            except ValidationError:
                raise ValueError("Image URL must be a valid URL")
        # An empty string clears the image
        return value or None


class ProductUpdate(ProductCreate):
    """Request body for updating a product; every field is optional"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)


class ProductResponse(CamelModel):
    success: bool = True
    data: Product


class ProductMutationResponse(CamelModel):
    success: bool = True
    message: str
    data: Product


class ProductListResponse(CamelModel):
    success: bool = True
    data: List[Product]
    pagination: Pagination
