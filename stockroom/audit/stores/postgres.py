"""PostgreSQL implementation of AuditLog.

Uses asyncpg for async database access. Rows are insert-only; the
seq column records insertion order for tie-breaking.
"""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

import asyncpg

from stockroom.audit.models import ActionType, AuditRecord
from stockroom.audit.store import AuditLog
from stockroom.db.errors import StorageError
from stockroom.db.pool import PostgresPool
from stockroom.observability.logging import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, action_type, product_id, product_name, timestamp"


class PostgresAuditLog(AuditLog):
    """PostgreSQL implementation of AuditLog.

    All records are immutable once written.
    """

    def __init__(self, pool: PostgresPool) -> None:
        """Initialize with connection pool.

        Args:
            pool: PostgreSQL connection pool
        """
        self._pool = pool

    async def append(
        self,
        action_type: ActionType,
        product_id: UUID,
        product_name: str,
    ) -> AuditRecord:
        record = AuditRecord(
            action_type=action_type,
            product_id=product_id,
            product_name=product_name,
        )
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(
                    """
                    INSERT INTO audit_records (
                        id, action_type, product_id, product_name, timestamp
                    ) VALUES ($1, $2, $3, $4, $5)
                    """,
                    record.id,
                    record.action_type.value,
                    record.product_id,
                    record.product_name,
                    record.timestamp,
                )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error(
                "postgres_append_audit_error",
                action_type=action_type.value,
                product_id=str(product_id),
                error=str(e),
            )
            raise StorageError(f"Failed to append audit record: {e}", cause=e) from e
        logger.debug("audit_record_saved", record_id=str(record.id))
        return record

    async def list_for_product(self, product_id: UUID) -> list[AuditRecord]:
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    f"""
                    SELECT {_COLUMNS} FROM audit_records
                    WHERE product_id = $1
                    ORDER BY timestamp DESC, seq DESC
                    """,
                    product_id,
                )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error(
                "postgres_list_product_audit_error", product_id=str(product_id), error=str(e)
            )
            raise StorageError(f"Failed to list audit records: {e}", cause=e) from e
        return [self._row_to_record(row) for row in rows]

    def _row_to_record(self, row: Mapping[str, Any]) -> AuditRecord:
        return AuditRecord(
            id=row["id"],
            action_type=ActionType(row["action_type"]),
            product_id=row["product_id"],
            product_name=row["product_name"],
            timestamp=row["timestamp"],
        )

    async def list(self) -> list[AuditRecord]:
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    f"SELECT {_COLUMNS} FROM audit_records ORDER BY timestamp DESC, seq DESC"
                )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error("postgres_list_audit_error", error=str(e))
            raise StorageError(f"Failed to list audit records: {e}", cause=e) from e
        return [self._row_to_record(row) for row in rows]
