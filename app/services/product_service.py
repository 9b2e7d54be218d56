"""
Product use cases, always scoped to the owning store.
"""
import logging
import math
from typing import Any, Dict, Optional

from app.db.catalog_repository import CatalogRepository
from app.errors import ProductNotFoundError
from app.schemas.base import EntityId, Pagination
from app.schemas.product import Product, ProductCreate, ProductListResponse, ProductUpdate
from app.services.cache_service import cache_service

logger = logging.getLogger(__name__)

# Cache keys
PRODUCTS_LIST_CACHE_KEY_PREFIX = "products:list:"
PRODUCTS_LIST_CACHE_TTL = 300  # 5 minutes

REQUIRED_PRODUCT_FIELDS = {"name", "description", "price", "stock"}


def invalidate_product_listings(store_id: EntityId) -> None:
    cache_service.delete_pattern(f"{PRODUCTS_LIST_CACHE_KEY_PREFIX}{store_id}:*")


def list_products(
    repository: CatalogRepository,
    store_id: EntityId,
    page: int,
    limit: int,
    category: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    in_stock: bool = False,
) -> Dict[str, Any]:
    """
    Fetches a filtered page of a store's products, newest first, with caching.
    """
    cache_key = (
        f"{PRODUCTS_LIST_CACHE_KEY_PREFIX}{store_id}:{category or ''}:"
        f"{min_price}:{max_price}:{in_stock}:{page}:{limit}"
    )
    cached_page = cache_service.get(cache_key)
    if cached_page is not None:
        logger.info(f"Returning cached product list for key: {cache_key}")
        return cached_page

    products, total = repository.list_products(
        store_id, page, limit,
        category=category, min_price=min_price, max_price=max_price, in_stock=in_stock,
    )
    result = ProductListResponse(
        data=products,
        pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
    ).model_dump(mode="json", by_alias=True)

    cache_service.set(cache_key, result, PRODUCTS_LIST_CACHE_TTL)
    return result


def get_product(repository: CatalogRepository, store_id: EntityId, product_id: EntityId) -> Product:
    product = repository.get_product(store_id, product_id)
    if product is None:
        raise ProductNotFoundError()
    return product


def create_product(repository: CatalogRepository, store_id: EntityId, payload: ProductCreate) -> Product:
    product = repository.create_product(store_id, payload.model_dump())
    invalidate_product_listings(store_id)
    return product


def update_product(
    repository: CatalogRepository, store_id: EntityId, product_id: EntityId, payload: ProductUpdate
) -> Product:
    changes = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key not in REQUIRED_PRODUCT_FIELDS
    }
    if changes:
        product = repository.update_product(store_id, product_id, changes)
    else:
        product = repository.get_product(store_id, product_id)
    if product is None:
        raise ProductNotFoundError()

    invalidate_product_listings(store_id)
    return product


def delete_product(repository: CatalogRepository, store_id: EntityId, product_id: EntityId) -> None:
    if not repository.delete_product(store_id, product_id):
        raise ProductNotFoundError()
    invalidate_product_listings(store_id)
