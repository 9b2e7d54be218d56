# app/api/v1/products.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_catalog_repository, get_existing_store
from app.db.catalog_repository import CatalogRepository
from app.schemas.base import MessageResponse
from app.schemas.product import (
    ProductCreate,
    ProductListResponse,
    ProductMutationResponse,
    ProductResponse,
    ProductUpdate,
)
from app.schemas.store import Store
from app.services import product_service

# Every route is nested under an existing store
router = APIRouter(prefix="/store/{store_id}")


@router.get("", response_model=ProductListResponse, summary="List a store's products")
def list_products(
    page: int = Query(1, ge=1, description="Page number for pagination"),
    limit: int = Query(20, ge=1, le=100, description="Number of products per page"),
    category: Optional[str] = Query(None, description="Only products of this category"),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    in_stock: bool = Query(False, alias="inStock", description="Only products with stock left"),
    store: Store = Depends(get_existing_store),
    repository: CatalogRepository = Depends(get_catalog_repository),
):
    return product_service.list_products(
        repository, store.id, page, limit,
        category=category, min_price=min_price, max_price=max_price, in_stock=in_stock,
    )


@router.get("/{product_id}", response_model=ProductResponse, summary="Get a product")
def get_product(
    product_id: str,
    store: Store = Depends(get_existing_store),
    repository: CatalogRepository = Depends(get_catalog_repository),
):
    return ProductResponse(data=product_service.get_product(repository, store.id, product_id))


@router.post("", response_model=ProductMutationResponse, status_code=status.HTTP_201_CREATED, summary="Create a product")
def create_product(
    payload: ProductCreate,
    store: Store = Depends(get_existing_store),
    repository: CatalogRepository = Depends(get_catalog_repository),
):
    product = product_service.create_product(repository, store.id, payload)
    return ProductMutationResponse(message="Product created successfully", data=product)


@router.put("/{product_id}", response_model=ProductMutationResponse, summary="Update a product")
def update_product(
    product_id: str,
    payload: ProductUpdate,
    store: Store = Depends(get_existing_store),
    repository: CatalogRepository = Depends(get_catalog_repository),
):
    product = product_service.update_product(repository, store.id, product_id, payload)
    return ProductMutationResponse(message="Product updated successfully", data=product)


@router.delete("/{product_id}", response_model=MessageResponse, summary="Delete a product")
def delete_product(
    product_id: str,
    store: Store = Depends(get_existing_store),
    repository: CatalogRepository = Depends(get_catalog_repository),
):
    product_service.delete_product(repository, store.id, product_id)
    return MessageResponse(message="Product deleted successfully")
