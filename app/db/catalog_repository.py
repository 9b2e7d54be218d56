"""
Store and product persistence on top of the Supabase tables.

Rows use snake_case columns; the owning store of a product lives in the
`store_id` column. Every method is blocking and is offloaded to a thread pool
by the services when it has to run concurrently.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from postgrest.exceptions import APIError
from supabase import Client

from app.config import settings
from app.schemas.base import EntityId
from app.schemas.product import Product
from app.schemas.store import Store

logger = logging.getLogger(__name__)

# PostgREST caps a single response, bulk reads are fetched in chunks of this size.
# Chunked and paginated queries order by id after created_at, which is shared by a whole batch insert.
FETCH_CHUNK_SIZE = 1000

# Postgres "invalid_text_representation", raised for malformed ids
INVALID_ID_CODE = "22P02"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _store_from_row(row: Dict[str, Any]) -> Store:
    return Store.model_validate(row)


def _product_from_row(row: Dict[str, Any]) -> Product:
    row = dict(row)
    row["store"] = row.pop("store_id")
    return Product.model_validate(row)


class CatalogRepository:
    """
    Data access for the `stores` and `products` tables.
    """

    def __init__(self, client: Client):
        self.client = client
        self.stores_table = settings.STORES_TABLE
        self.products_table = settings.PRODUCTS_TABLE

    def _fetch_all(self, build_query) -> List[Dict[str, Any]]:
        """Page through a query until PostgREST returns a short chunk."""
        rows: List[Dict[str, Any]] = []
        offset = 0
        while True:
            response = build_query().range(offset, offset + FETCH_CHUNK_SIZE - 1).execute()
            rows.extend(response.data)
            if len(response.data) < FETCH_CHUNK_SIZE:
                return rows
            offset += FETCH_CHUNK_SIZE

    def _first_or_none(self, query) -> Optional[Dict[str, Any]]:
        try:
            response = query.execute()
        except APIError as e:
            if e.code == INVALID_ID_CODE:
                return None
            raise
        return response.data[0] if response.data else None

    # --- Stores ---

    def list_stores(self, page: int, limit: int, city_type: Optional[str] = None) -> Tuple[List[Store], int]:
        query = self.client.table(self.stores_table).select("*", count="exact")
        if city_type:
            query = query.eq("city_type", city_type)

        offset = (page - 1) * limit
        query = query.order("created_at", desc=True).order("id", desc=True)
        response = query.range(offset, offset + limit - 1).execute()
        return [_store_from_row(row) for row in response.data], response.count or 0

    def all_stores(self) -> List[Store]:
        rows = self._fetch_all(
            lambda: self.client.table(self.stores_table).select("*").order("created_at").order("id")
        )
        return [_store_from_row(row) for row in rows]

    def get_store(self, store_id: EntityId) -> Optional[Store]:
        row = self._first_or_none(
            self.client.table(self.stores_table).select("*").eq("id", store_id).limit(1)
        )
        return _store_from_row(row) if row else None

    def create_store(self, data: Dict[str, Any]) -> Store:
        now = _now()
        row = {**data, "is_active": True, "created_at": now, "updated_at": now}
        response = self.client.table(self.stores_table).insert(row).execute()
        return _store_from_row(response.data[0])

    def update_store(self, store_id: EntityId, changes: Dict[str, Any]) -> Optional[Store]:
        row = self._first_or_none(
            self.client.table(self.stores_table)
            .update({**changes, "updated_at": _now()})
            .eq("id", store_id)
        )
        return _store_from_row(row) if row else None

    def delete_store(self, store_id: EntityId) -> bool:
        """Delete a store together with all of its products."""
        row = self._first_or_none(self.client.table(self.stores_table).delete().eq("id", store_id))
        if row is None:
            return False
        response = self.client.table(self.products_table).delete().eq("store_id", store_id).execute()
        logger.info(f"Deleted store {store_id} and {len(response.data)} of its products")
        return True

    # --- Products ---

    def list_products(
        self,
        store_id: EntityId,
        page: int,
        limit: int,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        in_stock: bool = False,
    ) -> Tuple[List[Product], int]:
        query = self.client.table(self.products_table).select("*", count="exact").eq("store_id", store_id)
        if category:
            query = query.eq("category", category)
        if min_price is not None:
            query = query.gte("price", min_price)
        if max_price is not None:
            query = query.lte("price", max_price)
        if in_stock:
            query = query.gt("stock", 0)

        offset = (page - 1) * limit
        query = query.order("created_at", desc=True).order("id", desc=True)
        response = query.range(offset, offset + limit - 1).execute()
        return [_product_from_row(row) for row in response.data], response.count or 0

    def find_products(self, store_id: EntityId, category: Optional[str] = None) -> List[Product]:
        """All products of one store, optionally limited to a category."""
        def build_query():
            query = self.client.table(self.products_table).select("*").eq("store_id", store_id)
            if category:
                query = query.eq("category", category)
            return query.order("created_at").order("id")

        return [_product_from_row(row) for row in self._fetch_all(build_query)]

    def all_products(self) -> List[Product]:
        rows = self._fetch_all(
            lambda: self.client.table(self.products_table).select("*").order("created_at").order("id")
        )
        return [_product_from_row(row) for row in rows]

    def get_product(self, store_id: EntityId, product_id: EntityId) -> Optional[Product]:
        row = self._first_or_none(
            self.client.table(self.products_table)
            .select("*")
            .eq("id", product_id)
            .eq("store_id", store_id)
            .limit(1)
        )
        return _product_from_row(row) if row else None

    def create_product(self, store_id: EntityId, data: Dict[str, Any]) -> Product:
        now = _now()
        row = {**data, "store_id": store_id, "is_available": True, "created_at": now, "updated_at": now}
        response = self.client.table(self.products_table).insert(row).execute()
        return _product_from_row(response.data[0])

    def update_product(self, store_id: EntityId, product_id: EntityId, changes: Dict[str, Any]) -> Optional[Product]:
        row = self._first_or_none(
            self.client.table(self.products_table)
            .update({**changes, "updated_at": _now()})
            .eq("id", product_id)
            .eq("store_id", store_id)
        )
        return _product_from_row(row) if row else None

    def set_product_price(self, product_id: EntityId, price: float) -> None:
        self.client.table(self.products_table).update(
            {"price": price, "updated_at": _now()}
        ).eq("id", product_id).execute()

    def delete_product(self, store_id: EntityId, product_id: EntityId) -> bool:
        row = self._first_or_none(
            self.client.table(self.products_table)
            .delete()
            .eq("id", product_id)
            .eq("store_id", store_id)
        )
        return row is not None

    # --- Seeding ---

    def clear_catalog(self) -> None:
        """Remove every product and store."""
        self.client.table(self.products_table).delete().not_.is_("id", "null").execute()
        self.client.table(self.stores_table).delete().not_.is_("id", "null").execute()

    def insert_products(self, store_id: EntityId, items: List[Dict[str, Any]]) -> List[Product]:
        now = _now()
        rows = [
            {**item, "store_id": store_id, "is_available": True, "created_at": now, "updated_at": now}
            for item in items
        ]
        response = self.client.table(self.products_table).insert(rows).execute()
        return [_product_from_row(row) for row in response.data]
