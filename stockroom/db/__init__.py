"""Database utilities for Stockroom.

This module contains:
- Connection pool management
- Store error hierarchy
- Alembic migrations
"""

from stockroom.db.errors import (
    FieldError,
    NotFoundError,
    StorageError,
    StoreError,
    ValidationError,
)

__all__ = [
    "StoreError",
    "StorageError",
    "NotFoundError",
    "ValidationError",
    "FieldError",
]
