"""Client-side mirror of the catalog and its audit trail.

CatalogCache holds an in-memory copy of the products and audit records
for an interactive consumer. It is an ordinary object owned by whoever
creates it: build one per session, open it, and close it when the
session ends.

Synchronization rules:
- Nothing is applied optimistically. The product mirror changes only
  after the server confirms a mutation, using the returned product.
- After every confirmed mutation the whole audit list is fetched again
  and replaces the local one. Audit ids and timestamps are assigned by
  the server, so records are never synthesized locally.
- A failed mutation leaves both mirrors untouched and skips the audit
  re-fetch. Every failure is reported to the Notifier.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from stockroom.api.models.crud import AuditRecordResponse, ProductResponse
from stockroom.client.client import StockroomClient, StockroomClientError
from stockroom.client.notifications import (
    LogNotifier,
    Notification,
    NotificationLevel,
    Notifier,
)
from stockroom.observability.logging import get_logger

logger = get_logger(__name__)


def _as_uuid(product_id: str | UUID) -> UUID | None:
    if isinstance(product_id, UUID):
        return product_id
    try:
        return UUID(product_id)
    except ValueError:
        return None


class CatalogCache:
    """In-memory mirror of products and audit records kept in sync by re-fetching.

    Usage:
        async with CatalogCache(client, notifier) as cache:
            await cache.add_product(
                {"name": "Widget", "price": 9.99, "stock": 5, "category": "Tools"}
            )
            cache.products, cache.audit_records
    """

    def __init__(
        self,
        client: StockroomClient,
        notifier: Notifier | None = None,
        *,
        owns_client: bool = False,
    ) -> None:
        """Initialize an empty cache.

        Args:
            client: API client used for every server call
            notifier: Receives success and failure notifications
            owns_client: Close the client when the cache is closed
        """
        self._client = client
        self._notifier = notifier or LogNotifier()
        self._owns_client = owns_client
        self._products: list[ProductResponse] = []
        self._audit_records: list[AuditRecordResponse] = []
        self._pending = 0
        self._loaded = False

    async def __aenter__(self) -> "CatalogCache":
        await self.open()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    @property
    def products(self) -> list[ProductResponse]:
        return list(self._products)

    @property
    def audit_records(self) -> list[AuditRecordResponse]:
        return list(self._audit_records)

    @property
    def is_loading(self) -> bool:
        """True until the first load finishes and while any operation is in flight."""
        return not self._loaded or self._pending > 0

    def get_product(self, product_id: str | UUID) -> ProductResponse | None:
        """Look up a product in the local mirror."""
        key = _as_uuid(product_id)
        return next((p for p in self._products if p.id == key), None)

    async def open(self) -> bool:
        """Start the session with an initial load."""
        return await self.refresh()

    async def close(self) -> None:
        """End the session: drop the mirrors and release an owned client."""
        self._products = []
        self._audit_records = []
        self._loaded = False
        if self._owns_client:
            await self._client.close()

    async def refresh(self) -> bool:
        """Fetch products and audit records in parallel and replace both mirrors.

        Returns:
            True on success; on failure the mirrors are left as they were
        """
        try:
            async with self._loading():
                results = await asyncio.gather(
                    self._client.list_products(),
                    self._client.list_audit_records(),
                    return_exceptions=True,
                )
                for result in results:
                    if isinstance(result, BaseException):
                        raise result
                products, records = results
        except StockroomClientError as e:
            self._fail("load", "Failed to fetch data", e)
            return False
        finally:
            self._loaded = True

        self._products = products
        self._audit_records = records
        logger.debug("cache_loaded", products=len(products), audit_records=len(records))
        return True

    async def add_product(self, fields: dict[str, Any]) -> ProductResponse | None:
        """Create a product on the server and mirror it.

        Returns:
            The created product, or None if the server rejected it
        """
        async with self._loading():
            try:
                product = await self._client.create_product(fields)
            except StockroomClientError as e:
                self._fail("add", "Failed to add product", e)
                return None

            self._products = [*self._products, product]
            await self._reload_audit_records()

        self._succeed("add", f'Product "{product.name}" added successfully')
        return product

    async def update_product(
        self,
        product_id: str | UUID,
        changes: dict[str, Any],
    ) -> ProductResponse | None:
        """Update a product on the server and mirror the returned version.

        A product the mirror did not know about yet is appended.

        Returns:
            The updated product, or None if the server rejected the update
        """
        async with self._loading():
            try:
                product = await self._client.update_product(product_id, changes)
            except StockroomClientError as e:
                self._fail("update", "Failed to update product", e)
                return None

            if any(p.id == product.id for p in self._products):
                self._products = [product if p.id == product.id else p for p in self._products]
            else:
                self._products = [*self._products, product]
            await self._reload_audit_records()

        self._succeed("update", f'Product "{product.name}" updated successfully')
        return product

    async def delete_product(self, product_id: str | UUID) -> bool:
        """Delete a product on the server and drop it from the mirror.

        Returns:
            True if the server confirmed the delete
        """
        known = self.get_product(product_id)
        async with self._loading():
            try:
                await self._client.delete_product(product_id)
            except StockroomClientError as e:
                self._fail("delete", "Failed to delete product", e)
                return False

            key = _as_uuid(product_id)
            self._products = [p for p in self._products if p.id != key]
            await self._reload_audit_records()

        name = known.name if known else str(product_id)
        self._succeed("delete", f'Product "{name}" deleted successfully')
        return True

    async def _reload_audit_records(self) -> None:
        # Runs only after a confirmed mutation; the product mirror keeps
        # the change even if this fails
        try:
            self._audit_records = await self._client.list_audit_records()
        except StockroomClientError as e:
            self._fail("refresh_audit", "Failed to refresh audit log", e)

    @asynccontextmanager
    async def _loading(self) -> AsyncIterator[None]:
        self._pending += 1
        try:
            yield
        finally:
            self._pending -= 1

    def _succeed(self, operation: str, message: str) -> None:
        self._notifier.notify(
            Notification(level=NotificationLevel.SUCCESS, operation=operation, message=message)
        )

    def _fail(self, operation: str, message: str, error: StockroomClientError) -> None:
        logger.warning(
            "cache_operation_failed",
            operation=operation,
            status_code=error.status_code,
            error=error.message,
        )
        self._notifier.notify(
            Notification(
                level=NotificationLevel.ERROR,
                operation=operation,
                message=f"{message}: {error.message}",
            )
        )
