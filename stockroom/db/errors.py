"""Store error hierarchy.

Product stores and audit logs raise these errors, never backend-specific ones,
so the coordinator and the API can handle every backend the same way.
"""

from dataclasses import dataclass


class StoreError(Exception):
    """Base exception for all store errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class StorageError(StoreError):
    """Raised when the durable storage fails.

    Examples:
        - Database connection timeout
        - Query failure
        - Pool exhaustion

    Not correctable by the client.
    """

    pass


class NotFoundError(StoreError):
    """Raised when a product id does not exist at lookup time."""

    def __init__(self, message: str, product_id: object | None = None) -> None:
        super().__init__(message)
        self.product_id = product_id


@dataclass(frozen=True)
class FieldError:
    """A single invalid field."""

    field: str
    message: str


class ValidationError(StoreError):
    """Raised when product fields are missing or invalid.

    Lists every failing field, not just the first one. No write has
    happened when this is raised.
    """

    def __init__(self, fields: list[FieldError]) -> None:
        names = ", ".join(f.field for f in fields)
        super().__init__(f"Invalid product fields: {names}")
        self.fields = fields

    @property
    def field_names(self) -> list[str]:
        """Names of the failing fields, in report order."""
        return [f.field for f in self.fields]
