"""Audit reconciliation workflow.

Product writes and audit appends are not transactional, so an audit
append that fails after a successful product write leaves a gap in the
trail. This job compares the catalog against the audit log and
backfills the records it can detect as missing:

- a product with no audit record at all is missing its Added record
- a product whose updated_at is newer than its newest audit record is
  missing an Updated record

A lost Deleted record cannot be detected because the product is gone.
"""

from dataclasses import dataclass, field
from uuid import UUID

from stockroom.audit.models import ActionType, AuditRecord
from stockroom.audit.store import AuditLog
from stockroom.catalog.models import Product
from stockroom.catalog.store import ProductStore
from stockroom.db.errors import StoreError
from stockroom.observability.logging import get_logger
from stockroom.observability.metrics import RECONCILED_RECORDS

logger = get_logger(__name__)


@dataclass
class ReconcileInput:
    """Input for the reconciliation workflow."""

    dry_run: bool = True  # Report gaps without writing


@dataclass
class ReconcileOutput:
    """Output from the reconciliation workflow."""

    success: bool
    dry_run: bool
    missing_added: list[UUID] = field(default_factory=list)
    missing_updated: list[UUID] = field(default_factory=list)
    backfilled_count: int = 0
    error: str | None = None


class AuditReconciliationWorkflow:
    """Workflow to find and backfill audit records lost by the dual write.

    Idempotent: once a gap is backfilled the product's newest record is
    at least as recent as its updated_at, so a second run finds nothing.
    """

    WORKFLOW_NAME = "reconcile-audit-log"

    def __init__(self, product_store: ProductStore, audit_log: AuditLog) -> None:
        """Initialize workflow.

        Args:
            product_store: Catalog to scan
            audit_log: Audit trail to check and backfill
        """
        self._store = product_store
        self._audit_log = audit_log

    async def run(self, input_data: ReconcileInput) -> ReconcileOutput:
        """Execute the reconciliation workflow.

        Args:
            input_data: Workflow input

        Returns:
            ReconcileOutput listing the products with gaps
        """
        output = ReconcileOutput(success=True, dry_run=input_data.dry_run)

        try:
            products = await self._store.list()
            newest = self._newest_records(await self._audit_log.list())

            for product in products:
                action = self._missing_action(product, newest.get(product.id))
                if action is None:
                    continue

                if action is ActionType.ADDED:
                    output.missing_added.append(product.id)
                else:
                    output.missing_updated.append(product.id)

                logger.info(
                    "audit_gap_detected",
                    product_id=str(product.id),
                    action_type=action.value,
                    dry_run=input_data.dry_run,
                )

                if not input_data.dry_run:
                    await self._audit_log.append(action, product.id, product.name)
                    RECONCILED_RECORDS.labels(action_type=action.value).inc()
                    output.backfilled_count += 1

        except StoreError as e:
            logger.error(
                "reconcile_audit_log_failed",
                error=e.message,
                backfilled_count=output.backfilled_count,
            )
            output.success = False
            output.error = e.message
            return output

        logger.info(
            "audit_log_reconciled",
            products_scanned=len(products),
            missing_added=len(output.missing_added),
            missing_updated=len(output.missing_updated),
            backfilled_count=output.backfilled_count,
            dry_run=input_data.dry_run,
        )
        return output

    @staticmethod
    def _newest_records(records: list[AuditRecord]) -> dict[UUID, AuditRecord]:
        # Records arrive newest first, so the first one seen per product wins
        newest: dict[UUID, AuditRecord] = {}
        for record in records:
            newest.setdefault(record.product_id, record)
        return newest

    @staticmethod
    def _missing_action(product: Product, newest: AuditRecord | None) -> ActionType | None:
        if newest is None:
            return ActionType.ADDED
        if product.updated_at > newest.timestamp:
            return ActionType.UPDATED
        return None
