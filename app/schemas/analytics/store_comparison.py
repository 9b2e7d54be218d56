# app/schemas/analytics/store_comparison.py

from typing import List

from pydantic import Field, field_validator

from app.schemas.base import CamelModel, EntityId, canonical_id


class StoreComparisonRequest(CamelModel):
    store_ids: List[EntityId] = Field(..., min_length=2, description="At least two store ids to compare")

    @field_validator("store_ids", mode="before")
    @classmethod
    def _canonical_ids(cls, value):
        # Integer primary keys are accepted as well as strings
        if isinstance(value, list):
            return [canonical_id(store_id) for store_id in value]
        return value


class StoreRef(CamelModel):
    id: EntityId
    name: str


class StoreMetrics(CamelModel):
    product_count: int = Field(..., description="Number of products in the store")
    total_value: float = Field(..., description="Inventory value (price x stock)")
    average_price: float = Field(..., description="Mean product price")
    total_stock: int = Field(..., description="Units in stock")
    categories: int = Field(..., description="Number of distinct categories")


class StoreComparison(CamelModel):
    store: StoreRef
    metrics: StoreMetrics


class ComparisonSummary(CamelModel):
    stores_compared: int = Field(..., description="Number of stores that could be resolved")
    total_products: int = Field(..., description="Products across all compared stores")
    highest_value: float = Field(..., description="Largest inventory value among compared stores")
    lowest_value: float = Field(..., description="Smallest inventory value among compared stores")


class StoreComparisonResponse(CamelModel):
    success: bool = True
    comparison: List[StoreComparison] = Field(..., description="Metrics per resolved store")
    summary: ComparisonSummary
