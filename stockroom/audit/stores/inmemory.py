"""In-memory implementation of AuditLog."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from stockroom.audit.models import ActionType, AuditRecord, utc_now
from stockroom.audit.store import AuditLog


class InMemoryAuditLog(AuditLog):
    """In-memory implementation of AuditLog for testing and development.

    Records are kept in insertion order; listing sorts by timestamp.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        """Initialize empty storage.

        Args:
            clock: Source of record timestamps
        """
        self._records: list[AuditRecord] = []
        self._clock = clock

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
            timestamp=self._clock(),
        )
        self._records.append(record)
        return record

    @staticmethod
    def _newest_first(records: list[AuditRecord]) -> list[AuditRecord]:
        # Stable sort over reversed insertion order: equal timestamps
        # keep the most recent insertion first
        return sorted(reversed(records), key=lambda r: r.timestamp, reverse=True)

    async def list_for_product(self, product_id: UUID) -> list[AuditRecord]:
        return self._newest_first([r for r in self._records if r.product_id == product_id])

    async def list(self) -> list[AuditRecord]:
        return self._newest_first(self._records)
