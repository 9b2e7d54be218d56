"""
Schemas package initialization
"""

from app.schemas.product import Product, ProductCreate, ProductUpdate
from app.schemas.store import Store, StoreCreate, StoreUpdate

__all__ = [
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "Store",
    "StoreCreate",
    "StoreUpdate",
]
