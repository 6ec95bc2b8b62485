"""Product store backends."""

from stockroom.catalog.store import ProductStore
from stockroom.catalog.stores.inmemory import InMemoryProductStore
from stockroom.catalog.stores.postgres import PostgresProductStore

__all__ = [
    "ProductStore",
    "InMemoryProductStore",
    "PostgresProductStore",
]
