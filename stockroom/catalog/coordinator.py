"""Mutation coordinator: pairs every product write with its audit record.

The product write and the audit append are two separate, non-transactional
writes. The product write always completes before the append is attempted,
so the trail never describes a write that did not happen. If the append
fails after the product write succeeded, the product write stands: the
failure is logged and counted, and the missing entry is left for the
reconciliation job (see stockroom.jobs.reconciliation).

No lock is held across the two writes. Concurrent mutations of the same
product are ordered only by the product store.
"""

from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from stockroom.audit.models import ActionType
from stockroom.audit.store import AuditLog
from stockroom.catalog.models import Product
from stockroom.catalog.store import ProductStore
from stockroom.db.errors import NotFoundError, StorageError, StoreError, ValidationError
from stockroom.observability.logging import get_logger
from stockroom.observability.metrics import AUDIT_APPEND_FAILURES, MUTATIONS

logger = get_logger(__name__)


class MutationCoordinator:
    """Performs catalog mutations and appends the matching audit records.

    Errors from the product store propagate unchanged and skip the audit
    append entirely. A StorageError from the audit append is logged and
    swallowed once the product write has succeeded.
    """

    def __init__(self, store: ProductStore, audit_log: AuditLog) -> None:
        self._store = store
        self._audit_log = audit_log

    async def add_product(self, fields: Mapping[str, Any]) -> Product:
        """Create a product and record an Added entry.

        Raises:
            ValidationError: if fields are missing or invalid (nothing written)
            StorageError: if the product write fails
        """
        async with self._track("add"):
            product = await self._store.create(fields)

        logger.info("product_created", product_id=str(product.id), name=product.name)
        await self._record(ActionType.ADDED, product.id, product.name)
        return product

    async def update_product(self, product_id: UUID, changes: Mapping[str, Any]) -> Product:
        """Update a product and record an Updated entry with its new name.

        Raises:
            NotFoundError: if the product does not exist (nothing written)
            ValidationError: if changes are invalid (nothing written)
            StorageError: if the product write fails
        """
        async with self._track("update"):
            await self._store.get(product_id)
            product = await self._store.update(product_id, changes)

        logger.info(
            "product_updated",
            product_id=str(product.id),
            fields=sorted(changes),
        )
        await self._record(ActionType.UPDATED, product.id, product.name)
        return product

    async def delete_product(self, product_id: UUID) -> None:
        """Delete a product and record a Deleted entry with its last name.

        Raises:
            NotFoundError: if the product does not exist (nothing written)
            StorageError: if the product write fails
        """
        async with self._track("delete"):
            await self._store.get(product_id)
            removed = await self._store.delete(product_id)

        logger.info("product_deleted", product_id=str(removed.id), name=removed.name)
        await self._record(ActionType.DELETED, removed.id, removed.name)

    async def _record(self, action_type: ActionType, product_id: UUID, name: str) -> None:
        try:
            await self._audit_log.append(action_type, product_id, name)
        except StorageError as e:
            AUDIT_APPEND_FAILURES.labels(action_type=action_type.value).inc()
            logger.error(
                "audit_append_failed",
                action_type=action_type.value,
                product_id=str(product_id),
                product_name=name,
                error=str(e),
            )

    @asynccontextmanager
    async def _track(self, operation: str) -> AsyncIterator[None]:
        """Count the outcome of the product-store half of a mutation."""
        try:
            yield
        except StoreError as e:
            outcome = _OUTCOMES.get(type(e), "storage_error")
            MUTATIONS.labels(operation=operation, outcome=outcome).inc()
            logger.warning("mutation_rejected", operation=operation, outcome=outcome)
            raise
        MUTATIONS.labels(operation=operation, outcome="ok").inc()


_OUTCOMES: dict[type[StoreError], str] = {
    ValidationError: "validation_error",
    NotFoundError: "not_found",
    StorageError: "storage_error",
}
