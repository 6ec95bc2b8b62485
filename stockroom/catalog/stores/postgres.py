"""PostgreSQL implementation of ProductStore.

Uses asyncpg for async database access. Every write is a single
statement, so it is atomic per product.
"""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

import asyncpg

from stockroom.catalog.models import Product, utc_now, validate_changes, validate_fields
from stockroom.catalog.store import ProductStore
from stockroom.db.errors import NotFoundError, StorageError
from stockroom.db.pool import PostgresPool
from stockroom.observability.logging import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, name, price, stock, category, created_at, updated_at"


class PostgresProductStore(ProductStore):
    """PostgreSQL implementation of ProductStore."""

    def __init__(self, pool: PostgresPool) -> None:
        """Initialize with connection pool.

        Args:
            pool: PostgreSQL connection pool
        """
        self._pool = pool

    async def create(self, fields: Mapping[str, Any]) -> Product:
        product = Product.create(validate_fields(fields))
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(
                    """
                    INSERT INTO products (
                        id, name, price, stock, category, created_at, updated_at
                    ) VALUES ($1, $2, $3, $4, $5, $6, $7)
                    """,
                    product.id,
                    product.name,
                    product.price,
                    product.stock,
                    product.category,
                    product.created_at,
                    product.updated_at,
                )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error("postgres_create_product_error", error=str(e))
            raise StorageError(f"Failed to create product: {e}", cause=e) from e
        return product

    async def get(self, product_id: UUID) -> Product:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT {_COLUMNS} FROM products WHERE id = $1",
                    product_id,
                )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error("postgres_get_product_error", product_id=str(product_id), error=str(e))
            raise StorageError(f"Failed to get product: {e}", cause=e) from e
        if row is None:
            raise NotFoundError(f"Product {product_id} not found", product_id=product_id)
        return self._row_to_product(row)

    async def update(self, product_id: UUID, changes: Mapping[str, Any]) -> Product:
        # Existence first, so an unknown id is NotFound even with bad changes
        await self.get(product_id)
        values = validate_changes(changes).as_dict()

        assignments = [f"{column} = ${i}" for i, column in enumerate(values, start=2)]
        # GREATEST keeps updated_at strictly increasing when the clock stalls
        assignments.append(
            f"updated_at = GREATEST(${len(values) + 2}, updated_at + interval '1 microsecond')"
        )
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    UPDATE products SET {", ".join(assignments)}
                    WHERE id = $1
                    RETURNING {_COLUMNS}
                    """,
                    product_id,
                    *values.values(),
                    utc_now(),
                )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error("postgres_update_product_error", product_id=str(product_id), error=str(e))
            raise StorageError(f"Failed to update product: {e}", cause=e) from e
        if row is None:
            # Deleted between the existence check and the update
            raise NotFoundError(f"Product {product_id} not found", product_id=product_id)
        return self._row_to_product(row)

    async def delete(self, product_id: UUID) -> Product:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"DELETE FROM products WHERE id = $1 RETURNING {_COLUMNS}",
                    product_id,
                )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error("postgres_delete_product_error", product_id=str(product_id), error=str(e))
            raise StorageError(f"Failed to delete product: {e}", cause=e) from e
        if row is None:
            raise NotFoundError(f"Product {product_id} not found", product_id=product_id)
        return self._row_to_product(row)

    def _row_to_product(self, row: Mapping[str, Any]) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            price=float(row["price"]),
            stock=row["stock"],
            category=row["category"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    async def list(self) -> list[Product]:
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(f"SELECT {_COLUMNS} FROM products")
        except (asyncpg.PostgresError, OSError) as e:
            logger.error("postgres_list_products_error", error=str(e))
            raise StorageError(f"Failed to list products: {e}", cause=e) from e
        return [self._row_to_product(row) for row in rows]
