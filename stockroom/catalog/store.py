"""ProductStore abstract interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from stockroom.catalog.models import Product


class ProductStore(ABC):
    """Abstract interface for the durable product collection.

    Implementations must make each create/update/delete atomic per key.
    The store knows nothing about auditing; pairing writes with audit
    records is the MutationCoordinator's job.

    All methods raise StorageError when the backend fails.
    """

    @abstractmethod
    async def create(self, fields: Mapping[str, Any]) -> Product:
        """Create a product from a full field set.

        Raises:
            ValidationError: listing every missing or invalid field
        """
        pass

    @abstractmethod
    async def get(self, product_id: UUID) -> Product:
        """Get a product by ID.

        Raises:
            NotFoundError: if the product does not exist
        """
        pass

    @abstractmethod
    async def update(self, product_id: UUID, changes: Mapping[str, Any]) -> Product:
        """Apply a partial field set and refresh updated_at.

        Existence is checked before the changes are validated.

        Raises:
            NotFoundError: if the product does not exist
            ValidationError: listing every invalid field
        """
        pass

    @abstractmethod
    async def delete(self, product_id: UUID) -> Product:
        """Remove a product and return its pre-delete snapshot.

        Raises:
            NotFoundError: if the product does not exist
        """
        pass

    @abstractmethod
    async def list(self) -> list[Product]:
        """Snapshot of all products, in no particular order."""
        pass
