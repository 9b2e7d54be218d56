"""
Store use cases: CRUD with cached listings, per-store analytics,
store comparison, bulk price adjustment and market density analysis.
"""
import logging
import math
from typing import Any, Dict, List, Optional

from app.db.catalog_repository import CatalogRepository
from app.errors import StoreNotFoundError
from app.schemas.analytics.market_density import MarketDensity
from app.schemas.analytics.store_analytics import InventorySummary, StoreAnalytics, StoreLocation
from app.schemas.analytics.store_comparison import (
    ComparisonSummary,
    StoreComparison,
    StoreComparisonResponse,
    StoreMetrics,
    StoreRef,
)
from app.schemas.base import EntityId, Pagination
from app.schemas.pricing import AppliedAdjustment, BulkPriceUpdate, BulkPriceUpdateResponse
from app.schemas.store import Store, StoreCreate, StoreListResponse, StoreUpdate
from app.services import analytics
from app.services.async_executor import run_blocking, run_parallel
from app.services.cache_service import cache_service
from app.services.product_service import invalidate_product_listings

logger = logging.getLogger(__name__)

# Cache keys
STORES_LIST_CACHE_KEY_PREFIX = "stores:list:"
STORES_LIST_CACHE_TTL = 300  # 5 minutes

# Columns that cannot be cleared once set
REQUIRED_STORE_FIELDS = {"name", "description", "city", "city_type"}


def invalidate_store_listings() -> None:
    cache_service.delete_pattern(f"{STORES_LIST_CACHE_KEY_PREFIX}*")


def list_stores(repository: CatalogRepository, page: int, limit: int, city_type: Optional[str] = None) -> Dict[str, Any]:
    """
    Fetches a page of stores, newest first, with caching.
    """
    cache_key = f"{STORES_LIST_CACHE_KEY_PREFIX}{city_type or 'all'}:{page}:{limit}"
    cached_page = cache_service.get(cache_key)
    if cached_page is not None:
        logger.info(f"Returning cached store list for key: {cache_key}")
        return cached_page

    stores, total = repository.list_stores(page, limit, city_type)
    result = StoreListResponse(
        data=stores,
        pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
    ).model_dump(mode="json", by_alias=True)

    cache_service.set(cache_key, result, STORES_LIST_CACHE_TTL)
    return result


def get_store(repository: CatalogRepository, store_id: EntityId) -> Store:
    store = repository.get_store(store_id)
    if store is None:
        raise StoreNotFoundError()
    return store


def create_store(repository: CatalogRepository, payload: StoreCreate) -> Store:
    store = repository.create_store(payload.model_dump())
    invalidate_store_listings()
    logger.info(f"Created store {store.id} ({store.name}) in {store.city}")
    return store


def update_store(repository: CatalogRepository, store_id: EntityId, payload: StoreUpdate) -> Store:
    changes = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key not in REQUIRED_STORE_FIELDS
    }
    store = repository.update_store(store_id, changes) if changes else repository.get_store(store_id)
    if store is None:
        raise StoreNotFoundError()

    invalidate_store_listings()
    return store


def delete_store(repository: CatalogRepository, store_id: EntityId) -> None:
    if not repository.delete_store(store_id):
        raise StoreNotFoundError()

    invalidate_store_listings()
    invalidate_product_listings(store_id)


def get_store_analytics(repository: CatalogRepository, store_id: EntityId) -> StoreAnalytics:
    """Inventory metrics, category breakdown and price histogram of one store."""
    store = get_store(repository, store_id)
    stats = analytics.get_product_stats(repository.find_products(store.id))

    return StoreAnalytics(
        store=StoreLocation(id=store.id, name=store.name, city=store.city, city_type=store.city_type),
        inventory=InventorySummary(
            total_products=stats.total_products,
            total_value=stats.total_value,
            average_price=stats.average_price,
            total_stock=stats.total_stock,
        ),
        categories=stats.category_stats,
        price_ranges=stats.price_ranges,
    )


def _compare_entry(repository: CatalogRepository, store_id: EntityId) -> Optional[StoreComparison]:
    store = repository.get_store(store_id)
    if store is None:
        return None

    stats = analytics.get_product_stats(repository.find_products(store.id))
    return StoreComparison(
        store=StoreRef(id=store.id, name=store.name),
        metrics=StoreMetrics(
            product_count=stats.total_products,
            total_value=stats.total_value,
            average_price=stats.average_price,
            total_stock=stats.total_stock,
            categories=len(stats.category_stats),
        ),
    )


async def compare_stores(repository: CatalogRepository, store_ids: List[EntityId]) -> StoreComparisonResponse:
    """
    Side-by-side metrics for several stores.
    Ids that do not resolve to a store are left out of the comparison.
    """
    entries = await run_parallel([
        (lambda store_id=store_id: _compare_entry(repository, store_id))
        for store_id in store_ids
    ])
    comparison = [entry for entry in entries if entry is not None]
    values = [entry.metrics.total_value for entry in comparison]

    return StoreComparisonResponse(
        comparison=comparison,
        summary=ComparisonSummary(
            stores_compared=len(comparison),
            total_products=sum(entry.metrics.product_count for entry in comparison),
            highest_value=max(values, default=0),
            lowest_value=min(values, default=0),
        ),
    )


def adjust_price(price: float, adjustment: float, adjustment_type: str) -> float:
    """Apply a percentage or fixed adjustment; prices never drop below zero."""
    if adjustment_type == "percentage":
        new_price = price * (1 + adjustment / 100)
    else:
        new_price = price + adjustment
    return max(0, new_price)


async def bulk_update_prices(
    repository: CatalogRepository, store_id: EntityId, payload: BulkPriceUpdate
) -> BulkPriceUpdateResponse:
    """
    Adjust the price of every product of a store, optionally only one category.
    Each product is updated independently; there is no rollback on failure.
    """
    store = await run_blocking(get_store, repository, store_id)
    products = await run_blocking(repository.find_products, store.id, payload.category)

    await run_parallel([
        (lambda product=product: repository.set_product_price(
            product.id, adjust_price(product.price, payload.adjustment, payload.type)
        ))
        for product in products
    ])
    invalidate_product_listings(store.id)
    logger.info(
        f"Adjusted {len(products)} prices in store {store.id} "
        f"({payload.type} {payload.adjustment}, category={payload.category or 'all'})"
    )

    return BulkPriceUpdateResponse(
        message="Prices updated successfully",
        updated_count=len(products),
        adjustment=AppliedAdjustment(
            type=payload.type,
            value=payload.adjustment,
            category=payload.category or "all",
        ),
    )


async def get_market_density(repository: CatalogRepository) -> MarketDensity:
    """
    Loads every store and product, then runs the market analysis on that snapshot.
    """
    stores, products = await run_parallel([repository.all_stores, repository.all_products])
    logger.info(f"Analyzing market density over {len(stores)} stores and {len(products)} products")
    return analytics.analyze_market(stores, products)
