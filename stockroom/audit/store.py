"""AuditLog abstract interface."""

from abc import ABC, abstractmethod
from uuid import UUID

from stockroom.audit.models import ActionType, AuditRecord


class AuditLog(ABC):
    """Abstract interface for the append-only audit trail.

    Records are never updated or deleted. Listing is ordered by timestamp
    descending; ties go to the most recent insertion.

    All methods raise StorageError when the backend fails.
    """

    @abstractmethod
    async def append(
        self,
        action_type: ActionType,
        product_id: UUID,
        product_name: str,
    ) -> AuditRecord:
        """Append a record, assigning its id and timestamp."""
        pass

    @abstractmethod
    async def list_for_product(self, product_id: UUID) -> list[AuditRecord]:
        """Records for one product, newest first."""
        pass

    @abstractmethod
    async def list(self) -> list[AuditRecord]:
        """All records, newest first."""
        pass
