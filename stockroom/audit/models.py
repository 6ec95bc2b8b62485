"""Audit domain models."""

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class ActionType(str, Enum):
    """The kind of catalog mutation an audit record describes."""

    ADDED = "Added"
    UPDATED = "Updated"
    DELETED = "Deleted"


class AuditRecord(BaseModel):
    """Immutable record of one catalog mutation.

    product_name is a copy of the product's name at the time of the
    action, so the trail stays readable after the product is deleted.
    product_id may point at a product that no longer exists.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4, description="Unique identifier")
    action_type: ActionType = Field(..., description="Kind of mutation")
    product_id: UUID = Field(..., description="Product the action applied to")
    product_name: str = Field(..., description="Product name at the time of the action")
    timestamp: datetime = Field(default_factory=utc_now, description="Time of the action")
