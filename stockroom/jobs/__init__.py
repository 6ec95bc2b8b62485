"""Maintenance jobs for Stockroom."""

from stockroom.jobs.reconciliation import (
    AuditReconciliationWorkflow,
    ReconcileInput,
    ReconcileOutput,
)

__all__ = [
    "AuditReconciliationWorkflow",
    "ReconcileInput",
    "ReconcileOutput",
]
