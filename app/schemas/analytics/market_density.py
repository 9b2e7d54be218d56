# app/schemas/analytics/market_density.py

from typing import List, Literal

from pydantic import Field

from app.schemas.base import CamelModel

CompetitionStatus = Literal["SATURATED", "COMPETITIVE", "EMERGING"]


class CityCategory(CamelModel):
    category: str = Field(..., description="Category label")
    store_count: int = Field(..., description="Number of stores in the city carrying this category")
    saturation: int = Field(..., description="Share of the city's stores carrying the category (0-100)")
    status: CompetitionStatus = Field(..., description="Competition level derived from saturation")


class CityReport(CamelModel):
    city: str = Field(..., description="City name")
    store_count: int = Field(..., description="Number of stores in the city")
    category_count: int = Field(..., description="Number of distinct categories offered in the city")
    categories: List[CityCategory] = Field(..., description="Per-category competition, most stores first")


class CityTypeCategory(CamelModel):
    category: str = Field(..., description="Category label")
    store_count: int = Field(..., description="Number of stores of this city type carrying the category")
    saturation: int = Field(..., description="Share of the city type's stores carrying the category (0-100)")


class CityTypeReport(CamelModel):
    city_type: str = Field(..., description="Location class (big, small, unknown)")
    store_count: int = Field(..., description="Number of stores in this location class")
    city_count: int = Field(..., description="Number of distinct cities in this location class")
    categories: List[CityTypeCategory] = Field(..., description="Per-category presence")


class CategoryGap(CamelModel):
    city_type: str = Field(..., description="Location class with missing categories")
    missing_categories: List[str] = Field(..., description="Categories offered elsewhere but not here")
    present_in: List[str] = Field(..., description="Other location classes offering any of the missing categories")


class LocationPattern(CamelModel):
    category: str = Field(..., description="Category label")
    present_in: List[str] = Field(..., description="Location classes offering the category")
    absent_from: List[str] = Field(..., description="Location classes without the category")
    coverage: str = Field(..., description="Coverage summary, e.g. '1/2 location types'")


class Opportunity(CamelModel):
    city_type: str = Field(..., description="Location class of the opportunity")
    category: str = Field(..., description="Category nobody offers there")
    reason: str = Field(..., description="Why this is an opportunity")
    competition_level: Literal["NONE"] = Field("NONE", description="Competition level, always NONE for a gap")
    recommendation: str = Field(..., description="Suggested action")


class MarketDensity(CamelModel):
    by_cities: List[CityReport]
    by_city_types: List[CityTypeReport]
    category_gaps: List[CategoryGap]
    patterns: List[LocationPattern]
    opportunities: List[Opportunity]


class MarketDensityResponse(CamelModel):
    success: bool = True
    data: MarketDensity = Field(..., description="Market density analysis")
