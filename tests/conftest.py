"""
Shared fixtures: an in-memory catalog standing in for the Supabase tables and
a TestClient wired to it through FastAPI dependency overrides.
"""
import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_catalog_repository
from app.db.catalog_repository import _product_from_row, _store_from_row
from app.main import app
from app.schemas.product import Product
from app.schemas.store import Store
from app.services.cache_service import cache_service

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class InMemoryCatalogRepository:
    """Same interface as CatalogRepository, rows kept in dicts keyed by id."""

    def __init__(self):
        self.stores: Dict[str, Dict[str, Any]] = {}
        self.products: Dict[str, Dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self._ticks = itertools.count()

    def _now(self) -> str:
        # Strictly increasing so "newest first" ordering is deterministic
        return (EPOCH + timedelta(seconds=next(self._ticks))).isoformat()

    def _new_row(self, data: Dict[str, Any], **extra) -> Dict[str, Any]:
        now = self._now()
        return {**data, **extra, "id": str(next(self._ids)), "created_at": now, "updated_at": now}

    @staticmethod
    def _page(rows: List[Dict[str, Any]], page: int, limit: int) -> List[Dict[str, Any]]:
        rows = sorted(rows, key=lambda row: row["created_at"], reverse=True)
        offset = (page - 1) * limit
        return rows[offset:offset + limit]

    # --- Test helpers ---

    def add_store(self, name: str = "Store", city: Optional[str] = "New York", city_type: Optional[str] = "big", **fields) -> Store:
        data = {"name": name, "description": f"{name} description", "city": city, "city_type": city_type, **fields}
        return self.create_store(data)

    def add_product(self, store: Store, name: str = "Product", price: float = 10.0, stock: int = 1,
                    category: Optional[str] = None, **fields) -> Product:
        data = {"name": name, "description": f"{name} description", "price": price, "stock": stock,
                "category": category, **fields}
        return self.create_product(store.id, data)

    # --- Stores ---

    def list_stores(self, page: int, limit: int, city_type: Optional[str] = None) -> Tuple[List[Store], int]:
        rows = [row for row in self.stores.values() if not city_type or row.get("city_type") == city_type]
        return [_store_from_row(row) for row in self._page(rows, page, limit)], len(rows)

    def all_stores(self) -> List[Store]:
        return [_store_from_row(row) for row in self.stores.values()]

    def get_store(self, store_id) -> Optional[Store]:
        row = self.stores.get(str(store_id))
        return _store_from_row(row) if row else None

    def create_store(self, data: Dict[str, Any]) -> Store:
        row = self._new_row(data, is_active=True)
        self.stores[row["id"]] = row
        return _store_from_row(row)

    def update_store(self, store_id, changes: Dict[str, Any]) -> Optional[Store]:
        row = self.stores.get(str(store_id))
        if row is None:
            return None
        row.update(changes, updated_at=self._now())
        return _store_from_row(row)

    def delete_store(self, store_id) -> bool:
        if self.stores.pop(str(store_id), None) is None:
            return False
        for product_id in [pid for pid, row in self.products.items() if row["store_id"] == str(store_id)]:
            del self.products[product_id]
        return True

    # --- Products ---

    def list_products(self, store_id, page: int, limit: int, category: Optional[str] = None,
                      min_price: Optional[float] = None, max_price: Optional[float] = None,
                      in_stock: bool = False) -> Tuple[List[Product], int]:
        rows = [
            row for row in self.products.values()
            if row["store_id"] == str(store_id)
            and (not category or row.get("category") == category)
            and (min_price is None or row["price"] >= min_price)
            and (max_price is None or row["price"] <= max_price)
            and (not in_stock or row["stock"] > 0)
        ]
        return [_product_from_row(row) for row in self._page(rows, page, limit)], len(rows)

    def find_products(self, store_id, category: Optional[str] = None) -> List[Product]:
        return [
            _product_from_row(row) for row in self.products.values()
            if row["store_id"] == str(store_id) and (not category or row.get("category") == category)
        ]

    def all_products(self) -> List[Product]:
        return [_product_from_row(row) for row in self.products.values()]

    def get_product(self, store_id, product_id) -> Optional[Product]:
        row = self.products.get(str(product_id))
        if row is None or row["store_id"] != str(store_id):
            return None
        return _product_from_row(row)

    def create_product(self, store_id, data: Dict[str, Any]) -> Product:
        row = self._new_row(data, store_id=str(store_id), is_available=True)
        self.products[row["id"]] = row
        return _product_from_row(row)

    def update_product(self, store_id, product_id, changes: Dict[str, Any]) -> Optional[Product]:
        row = self.products.get(str(product_id))
        if row is None or row["store_id"] != str(store_id):
            return None
        row.update(changes, updated_at=self._now())
        return _product_from_row(row)

    def set_product_price(self, product_id, price: float) -> None:
        self.products[str(product_id)].update(price=price, updated_at=self._now())

    def delete_product(self, store_id, product_id) -> bool:
        row = self.products.get(str(product_id))
        if row is None or row["store_id"] != str(store_id):
            return False
        del self.products[str(product_id)]
        return True

    # --- Seeding ---

    def clear_catalog(self) -> None:
        self.products.clear()
        self.stores.clear()

    def insert_products(self, store_id, items: List[Dict[str, Any]]) -> List[Product]:
        return [self.create_product(store_id, item) for item in items]


@pytest.fixture
def repository():
    return InMemoryCatalogRepository()


@pytest.fixture
def client(repository, monkeypatch):
    monkeypatch.setattr(cache_service, "enabled", False)
    app.dependency_overrides[get_catalog_repository] = lambda: repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
