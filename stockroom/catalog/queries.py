"""Read-only access to the catalog and its audit trail."""

from uuid import UUID

from stockroom.audit.models import AuditRecord
from stockroom.audit.store import AuditLog
from stockroom.catalog.models import Product
from stockroom.catalog.store import ProductStore


class QueryService:
    """Lists products and audit records straight from the stores.

    No caching: every call reflects the durable state at call time.
    """

    def __init__(self, store: ProductStore, audit_log: AuditLog) -> None:
        self._store = store
        self._audit_log = audit_log

    async def list_products(self) -> list[Product]:
        """All products, unordered."""
        return await self._store.list()

    async def get_product(self, product_id: UUID) -> Product:
        """A single product; raises NotFoundError if absent."""
        return await self._store.get(product_id)

    async def list_audit_records(self, product_id: UUID | None = None) -> list[AuditRecord]:
        """Audit records newest first, optionally only those of one product."""
        if product_id is not None:
            return await self._audit_log.list_for_product(product_id)
        return await self._audit_log.list()
