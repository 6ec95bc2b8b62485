"""Error response models for consistent API error handling."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes for API responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Product fields are missing or invalid."""

    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    """The product id does not exist."""

    STORAGE_ERROR = "STORAGE_ERROR"
    """The durable storage failed."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level error information for validation failures."""

    field: str | None = None
    """The field that caused the error, if applicable."""

    message: str
    """Human-readable error description."""


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Standard error envelope.

    Example:
        {
            "success": false,
            "error": {
                "code": "PRODUCT_NOT_FOUND",
                "message": "No product found"
            }
        }
    """

    success: Literal[False] = False
    error: ErrorBody
