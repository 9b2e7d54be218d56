"""
Shared pieces for all catalog schemas.

The API speaks camelCase JSON while the Python side stays snake_case, so every
model derives from `CamelModel`.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Canonical form of every entity identifier (store ids, product ids)
EntityId = str


def canonical_id(value: Any) -> EntityId:
    """
    Convert a store/product identifier to its canonical string form.

    Supabase returns integer or UUID primary keys depending on the table
    definition; both are compared and used as mapping keys as strings.
    """
    if value is None:
        raise ValueError("identifier cannot be None")
    return str(value)


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class MessageResponse(CamelModel):
    success: bool = True
    message: str
