# app/api/v1/stores.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_catalog_repository
from app.db.catalog_repository import CatalogRepository
from app.schemas.analytics.market_density import MarketDensityResponse
from app.schemas.analytics.store_analytics import StoreAnalyticsResponse
from app.schemas.analytics.store_comparison import StoreComparisonRequest, StoreComparisonResponse
from app.schemas.base import MessageResponse
from app.schemas.pricing import BulkPriceUpdate, BulkPriceUpdateResponse
from app.schemas.store import (
    CityType,
    StoreCreate,
    StoreListResponse,
    StoreMutationResponse,
    StoreResponse,
    StoreUpdate,
)
from app.services import store_service

router = APIRouter()


@router.get("/analytics/market-density", response_model=MarketDensityResponse, summary="Get market density analysis")
async def get_market_density(repository: CatalogRepository = Depends(get_catalog_repository)):
    """
    Competition per city and city type, category gaps, location patterns
    and the business opportunities derived from the gaps.
    """
    data = await store_service.get_market_density(repository)
    return MarketDensityResponse(data=data)


@router.post("/compare", response_model=StoreComparisonResponse, summary="Compare stores")
async def compare_stores(
    payload: StoreComparisonRequest,
    repository: CatalogRepository = Depends(get_catalog_repository),
):
    """
    Compare inventory metrics of two or more stores.

    - **storeIds**: at least two store ids; unknown ids are skipped
    """
    return await store_service.compare_stores(repository, payload.store_ids)


@router.get("", response_model=StoreListResponse, summary="List stores")
def list_stores(
    page: int = Query(1, ge=1, description="Page number for pagination"),
    limit: int = Query(10, ge=1, le=100, description="Number of stores per page"),
    city_type: Optional[CityType] = Query(None, alias="cityType", description="Only stores of this city type"),
    repository: CatalogRepository = Depends(get_catalog_repository),
):
    return store_service.list_stores(repository, page, limit, city_type)


@router.get("/{store_id}", response_model=StoreResponse, summary="Get a store")
def get_store(store_id: str, repository: CatalogRepository = Depends(get_catalog_repository)):
    return StoreResponse(data=store_service.get_store(repository, store_id))


@router.post("", response_model=StoreMutationResponse, status_code=status.HTTP_201_CREATED, summary="Create a store")
def create_store(payload: StoreCreate, repository: CatalogRepository = Depends(get_catalog_repository)):
    store = store_service.create_store(repository, payload)
    return StoreMutationResponse(message="Store created successfully", data=store)


@router.put("/{store_id}", response_model=StoreMutationResponse, summary="Update a store")
def update_store(
    store_id: str,
    payload: StoreUpdate,
    repository: CatalogRepository = Depends(get_catalog_repository),
):
    store = store_service.update_store(repository, store_id, payload)
    return StoreMutationResponse(message="Store updated successfully", data=store)


@router.delete("/{store_id}", response_model=MessageResponse, summary="Delete a store and its products")
def delete_store(store_id: str, repository: CatalogRepository = Depends(get_catalog_repository)):
    store_service.delete_store(repository, store_id)
    return MessageResponse(message="Store and its products deleted successfully")


@router.get("/{store_id}/analytics", response_model=StoreAnalyticsResponse, summary="Get store analytics")
def get_store_analytics(store_id: str, repository: CatalogRepository = Depends(get_catalog_repository)):
    """
    Inventory totals, category breakdown and price distribution of a single store.
    """
    return StoreAnalyticsResponse(data=store_service.get_store_analytics(repository, store_id))


@router.post("/{store_id}/bulk-price-update", response_model=BulkPriceUpdateResponse, summary="Adjust prices in bulk")
async def bulk_update_prices(
    store_id: str,
    payload: BulkPriceUpdate,
    repository: CatalogRepository = Depends(get_catalog_repository),
):
    """
    Adjust every product price of a store.

    - **adjustment**: percent for `percentage`, amount for `fixed`; must not be zero
    - **type**: `percentage` or `fixed`
    - **category**: optionally restrict the update to one category
    """
    return await store_service.bulk_update_prices(repository, store_id, payload)
