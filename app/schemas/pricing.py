# app/schemas/pricing.py

"""
Pydantic schemas for bulk price adjustments
"""
from typing import Literal, Optional

from pydantic import Field, field_validator

from app.schemas.base import CamelModel

AdjustmentType = Literal["percentage", "fixed"]


class BulkPriceUpdate(CamelModel):
    """Request body for the bulk price update endpoint"""
    adjustment: float = Field(..., description="Percent (percentage) or amount (fixed) to add")
    type: AdjustmentType = Field(..., description="percentage or fixed")
    category: Optional[str] = Field(None, description="Only adjust products of this category")

    @field_validator("adjustment")
    @classmethod
    def _non_zero(cls, value):
        if value == 0:
            raise ValueError("Adjustment must be a non-zero number")
        return value


class AppliedAdjustment(CamelModel):
    type: AdjustmentType
    value: float
    category: str


class BulkPriceUpdateResponse(CamelModel):
    success: bool = True
    message: str
    updated_count: int
    adjustment: AppliedAdjustment
