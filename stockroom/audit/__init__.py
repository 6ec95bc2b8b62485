"""Append-only audit trail of catalog mutations."""

from stockroom.audit.models import ActionType, AuditRecord
from stockroom.audit.store import AuditLog

__all__ = ["ActionType", "AuditLog", "AuditRecord"]
