"""Request and response models for catalog operations."""

from datetime import datetime
from typing import Generic, Literal, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from stockroom.audit.models import ActionType, AuditRecord
from stockroom.catalog.models import Product

T = TypeVar("T")


# Product models
class ProductResponse(BaseModel):
    """Response model for a product."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    price: float
    stock: int
    category: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls.model_validate(product, from_attributes=True)


# Audit models
class AuditRecordResponse(BaseModel):
    """Response model for an audit record."""

    id: UUID
    action_type: ActionType
    product_id: UUID
    product_name: str
    timestamp: datetime

    @classmethod
    def from_record(cls, record: AuditRecord) -> "AuditRecordResponse":
        return cls.model_validate(record, from_attributes=True)


# Envelopes
class DataResponse(BaseModel, Generic[T]):
    """Envelope for a single item."""

    success: Literal[True] = True
    data: T


class ListResponse(BaseModel, Generic[T]):
    """Envelope for a list of items."""

    success: Literal[True] = True
    count: int
    data: list[T]


class Ack(BaseModel):
    """Empty payload acknowledging a delete."""
