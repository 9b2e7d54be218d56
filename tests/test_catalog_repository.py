"""
CatalogRepository against a stub Supabase client.

The stub keeps rows per table and answers the query-builder calls the
repository makes. Like Postgres, rows that tie on every ORDER BY column come
back in a different order on each query.
"""
import random

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from app.api.deps import get_catalog_repository
from app.db import catalog_repository
from app.db.catalog_repository import CatalogRepository
from app.main import app
from app.services.cache_service import cache_service

BATCH_TIMESTAMP = "2024-01-01T00:00:00+00:00"


class StubResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class StubNegation:
    def __init__(self, query):
        self.query = query

    def is_(self, column, value):
        self.query.filters.append(lambda row: row.get(column) is not None)
        return self.query


class StubQuery:
    """Records one PostgREST request and runs it on execute()."""

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.action = "select"
        self.payload = None
        self.filters = []
        self.orders = []
        self.window = None
        self.with_count = False
        self.compared_ids = []

    def _check_ids(self):
        # bigint id columns reject anything that is not a number
        for value in self.compared_ids:
            if not str(value).isdigit():
                raise APIError({
                    "code": "22P02",
                    "message": f'invalid input syntax for type bigint: "{value}"',
                    "hint": None,
                    "details": None,
                })

    def select(self, *columns, count=None):
        self.with_count = count == "exact"
        return self

    def insert(self, rows):
        self.action, self.payload = "insert", rows
        return self

    def update(self, changes):
        self.action, self.payload = "update", changes
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        if column in ("id", "store_id"):
            self.compared_ids.append(value)
        self.filters.append(lambda row: str(row.get(column)) == str(value))
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row[column] >= value)
        return self

    def lte(self, column, value):
        self.filters.append(lambda row: row[column] <= value)
        return self

    def gt(self, column, value):
        self.filters.append(lambda row: row[column] > value)
        return self

    @property
    def not_(self):
        return StubNegation(self)

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def range(self, start, end):
        self.window = (start, end)
        return self

    def limit(self, size):
        self.window = (0, size - 1)
        return self

    def execute(self):
        if self.client.failure is not None:
            raise self.client.failure
        self._check_ids()

        rows = self.client.tables.setdefault(self.table, [])
        if self.action == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = [{**row, "id": self.client.next_id()} for row in payload]
            rows.extend(inserted)
            return StubResponse([dict(row) for row in inserted])

        matched = [row for row in rows if all(match(row) for match in self.filters)]
        if self.action == "update":
            for row in matched:
                row.update(self.payload)
            return StubResponse([dict(row) for row in matched])
        if self.action == "delete":
            self.client.tables[self.table] = [row for row in rows if row not in matched]
            self.client.deletes.append((self.table, len(matched)))
            return StubResponse([dict(row) for row in matched])

        # Ties on the ORDER BY columns come back in an arbitrary order
        self.client.shuffler.shuffle(matched)
        for column, desc in reversed(self.orders):
            matched.sort(key=lambda row: row[column], reverse=desc)
        total = len(matched)
        if self.window is not None:
            start, end = self.window
            matched = matched[start:end + 1]
        return StubResponse([dict(row) for row in matched], count=total if self.with_count else None)


class StubSupabaseClient:

    def __init__(self):
        self.tables = {"stores": [], "products": []}
        self.deletes = []
        self.failure = None
        self.shuffler = random.Random(7)
        self._last_id = 0

    def next_id(self):
        self._last_id += 1
        return self._last_id

    def table(self, name):
        return StubQuery(self, name)


@pytest.fixture
def stub_client():
    return StubSupabaseClient()


@pytest.fixture
def catalog(stub_client):
    return CatalogRepository(stub_client)


def add_store(catalog, name="Store", city_type="big"):
    return catalog.create_store({"name": name, "description": name, "city": "Chicago", "city_type": city_type})


def add_products(catalog, store, count, category=None):
    return catalog.insert_products(store.id, [
        {"name": f"{store.name} {i}", "description": "item", "price": 10 + i, "stock": 1, "category": category}
        for i in range(count)
    ])


class TestChunkedReads:

    @pytest.fixture(autouse=True)
    def small_chunks(self, monkeypatch):
        monkeypatch.setattr(catalog_repository, "FETCH_CHUNK_SIZE", 2)

    def test_all_products_reads_past_one_chunk(self, catalog):
        store = add_store(catalog)
        created = add_products(catalog, store, 5)
        assert [p.id for p in catalog.all_products()] == [p.id for p in created]

    def test_tied_timestamps_neither_repeat_nor_skip_rows(self, catalog):
        store = add_store(catalog)
        created = add_products(catalog, store, 4)
        assert len({p.created_at for p in created}) == 1

        expected = [p.id for p in created]
        for _ in range(5):
            assert [p.id for p in catalog.all_products()] == expected
            assert [p.id for p in catalog.find_products(store.id)] == expected

    def test_all_stores_reads_past_one_chunk(self, catalog, stub_client):
        stub_client.tables["stores"] = [
            {"id": i, "name": f"Store {i}", "city": "Chicago", "city_type": "big", "created_at": BATCH_TIMESTAMP}
            for i in range(1, 6)
        ]
        assert [s.id for s in catalog.all_stores()] == ["1", "2", "3", "4", "5"]

    def test_find_products_is_scoped_to_store_and_category(self, catalog):
        store, other = add_store(catalog, "Main"), add_store(catalog, "Other")
        food = add_products(catalog, store, 3, category="Food")
        add_products(catalog, store, 2, category="Tools")
        add_products(catalog, other, 3, category="Food")

        assert [p.id for p in catalog.find_products(store.id, "Food")] == [p.id for p in food]
        assert len(catalog.find_products(store.id)) == 5
        assert {p.store for p in catalog.find_products(other.id)} == {other.id}


class TestPagination:

    def test_list_stores_newest_first_with_stable_ties(self, catalog, stub_client):
        stub_client.tables["stores"] = [
            {"id": i, "name": f"Store {i}", "city": "Chicago", "city_type": "big", "created_at": BATCH_TIMESTAMP}
            for i in range(1, 6)
        ]
        first_page, total = catalog.list_stores(1, 3)
        second_page, _ = catalog.list_stores(2, 3)
        assert total == 5
        assert [s.id for s in first_page + second_page] == ["5", "4", "3", "2", "1"]

    def test_list_products_filters(self, catalog):
        store, other = add_store(catalog, "Main"), add_store(catalog, "Other")
        add_products(catalog, store, 4, category="Food")
        add_products(catalog, other, 2, category="Food")

        products, total = catalog.list_products(store.id, 1, 10, category="Food", min_price=11, max_price=12)
        assert total == 2
        assert sorted(p.price for p in products) == [11, 12]
        assert {p.store for p in products} == {store.id}


class TestMalformedIds:

    def test_reads_and_writes_answer_not_found(self, catalog):
        store = add_store(catalog)
        assert catalog.get_store("not-an-id") is None
        assert catalog.update_store("not-an-id", {"name": "Renamed"}) is None
        assert catalog.delete_store("not-an-id") is False
        assert catalog.get_product(store.id, "not-an-id") is None
        assert catalog.delete_product(store.id, "not-an-id") is False

    def test_other_storage_errors_propagate(self, catalog, stub_client):
        stub_client.failure = APIError({
            "code": "57014", "message": "canceling statement due to statement timeout", "hint": None, "details": None,
        })
        with pytest.raises(APIError):
            catalog.get_store("1")

    @pytest.mark.parametrize("path", ["/api/stores/not-an-id", "/api/products/store/not-an-id"])
    def test_router_answers_404(self, catalog, monkeypatch, path):
        monkeypatch.setattr(cache_service, "enabled", False)
        app.dependency_overrides[get_catalog_repository] = lambda: catalog
        try:
            with TestClient(app) as test_client:
                response = test_client.get(path)
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Store not found"}


class TestDeleteStore:

    def test_deletes_store_then_its_products(self, catalog, stub_client):
        store, other = add_store(catalog, "Main"), add_store(catalog, "Other")
        add_products(catalog, store, 3)
        kept = add_products(catalog, other, 2)

        assert catalog.delete_store(store.id) is True
        assert stub_client.deletes == [("stores", 1), ("products", 3)]
        assert catalog.get_store(store.id) is None
        assert [p.id for p in catalog.all_products()] == [p.id for p in kept]

    def test_missing_store_leaves_products_alone(self, catalog, stub_client):
        store = add_store(catalog)
        add_products(catalog, store, 2)

        assert catalog.delete_store("999") is False
        assert stub_client.deletes == [("stores", 0)]
        assert len(catalog.all_products()) == 2
