"""Audit log backends."""

from stockroom.audit.store import AuditLog
from stockroom.audit.stores.inmemory import InMemoryAuditLog
from stockroom.audit.stores.postgres import PostgresAuditLog

__all__ = [
    "AuditLog",
    "InMemoryAuditLog",
    "PostgresAuditLog",
]
