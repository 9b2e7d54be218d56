# app/schemas/analytics/store_analytics.py

from typing import List, Optional

from pydantic import Field

from app.schemas.base import CamelModel, EntityId


class CategoryStat(CamelModel):
    category: str = Field(..., description="Category label, Uncategorized when missing")
    product_count: int = Field(..., description="Number of products in this category")
    total_value: float = Field(..., description="Inventory value (price x stock) of the category")


class PriceBucket(CamelModel):
    range: str = Field(..., description="Bucket label, e.g. $25-$50")
    count: int = Field(..., description="Number of products priced inside the bucket")


class ProductStats(CamelModel):
    total_products: int
    total_value: float
    average_price: float
    total_stock: int
    category_stats: List[CategoryStat]
    price_ranges: List[PriceBucket]


class StoreLocation(CamelModel):
    id: EntityId
    name: str
    city: Optional[str] = None
    city_type: Optional[str] = None


class InventorySummary(CamelModel):
    total_products: int = Field(..., description="Number of products in the store")
    total_value: float = Field(..., description="Inventory value (price x stock)")
    average_price: float = Field(..., description="Mean product price")
    total_stock: int = Field(..., description="Units in stock across all products")


class StoreAnalytics(CamelModel):
    store: StoreLocation
    inventory: InventorySummary
    categories: List[CategoryStat]
    price_ranges: List[PriceBucket]


class StoreAnalyticsResponse(CamelModel):
    success: bool = True
    data: StoreAnalytics
