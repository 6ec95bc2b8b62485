"""API exception hierarchy for consistent error handling.

All API exceptions inherit from StockroomAPIError, which provides
status_code and error_code attributes used by the global exception
handler to generate consistent error responses.
"""

from stockroom.api.models.errors import ErrorCode, ErrorDetail
from stockroom.db.errors import NotFoundError, StoreError, ValidationError


class StockroomAPIError(Exception):
    """Base exception for all API errors."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: list[ErrorDetail] | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidRequestError(StockroomAPIError):
    """Raised when product fields are missing or invalid."""

    status_code = 400
    error_code = ErrorCode.INVALID_REQUEST


class ProductNotFoundError(StockroomAPIError):
    """Raised when a product id doesn't exist."""

    status_code = 404
    error_code = ErrorCode.PRODUCT_NOT_FOUND


class StorageUnavailableError(StockroomAPIError):
    """Raised when the durable storage fails."""

    status_code = 500
    error_code = ErrorCode.STORAGE_ERROR


def from_store_error(error: StoreError) -> StockroomAPIError:
    """Map a store error onto the API exception that renders it."""
    if isinstance(error, ValidationError):
        return InvalidRequestError(
            error.message,
            details=[ErrorDetail(field=f.field, message=f.message) for f in error.fields],
        )
    if isinstance(error, NotFoundError):
        return ProductNotFoundError("No product found")
    return StorageUnavailableError("Storage unavailable")
