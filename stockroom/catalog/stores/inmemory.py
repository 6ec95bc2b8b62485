"""In-memory implementation of ProductStore."""

import asyncio
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from stockroom.catalog.models import Product, validate_changes, validate_fields
from stockroom.catalog.store import ProductStore
from stockroom.db.errors import NotFoundError


class InMemoryProductStore(ProductStore):
    """In-memory implementation of ProductStore for testing and development.

    A single asyncio.Lock makes each write atomic. Ids are uuid4 and
    are never reused after deletion.
    """

    def __init__(self) -> None:
        self._products: dict[UUID, Product] = {}
        self._lock = asyncio.Lock()

    async def create(self, fields: Mapping[str, Any]) -> Product:
        product = Product.create(validate_fields(fields))
        async with self._lock:
            self._products[product.id] = product
        return product

    async def get(self, product_id: UUID) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found", product_id=product_id)
        return product

    async def update(self, product_id: UUID, changes: Mapping[str, Any]) -> Product:
        async with self._lock:
            existing = self._products.get(product_id)
            if existing is None:
                raise NotFoundError(f"Product {product_id} not found", product_id=product_id)
            updated = existing.apply(validate_changes(changes))
            self._products[product_id] = updated
        return updated

    async def delete(self, product_id: UUID) -> Product:
        async with self._lock:
            product = self._products.pop(product_id, None)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found", product_id=product_id)
        return product

    async def list(self) -> list[Product]:
        return list(self._products.values())
