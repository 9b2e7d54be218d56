# app/api/deps.py

import logging

from fastapi import Depends, Path

from app.db.catalog_repository import CatalogRepository
from app.db.supabase_client import get_supabase_client
from app.errors import StorageUnavailableError, StoreNotFoundError
from app.schemas.store import Store

logger = logging.getLogger(__name__)


def get_catalog_repository() -> CatalogRepository:
    """
    Returns a repository bound to the shared Supabase client.
    """
    try:
        client = get_supabase_client()
    except ValueError:
        raise StorageUnavailableError()
    return CatalogRepository(client)


def get_existing_store(
    store_id: str = Path(..., description="Id of the store owning the products"),
    repository: CatalogRepository = Depends(get_catalog_repository),
) -> Store:
    """
    Resolves the store of a nested product route, answering 404 when it does not exist.
    """
    store = repository.get_store(store_id)
    if store is None:
        logger.info(f"Rejected request for unknown store {store_id}")
        raise StoreNotFoundError()
    return store
