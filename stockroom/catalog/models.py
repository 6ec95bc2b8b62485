"""Product domain models."""

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from stockroom.db.errors import FieldError, ValidationError

EDITABLE_FIELDS: tuple[str, ...] = ("name", "price", "stock", "category")


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class ProductFields(BaseModel):
    """The user-editable fields of a product.

    Unknown keys are ignored; id and timestamps are never taken from input.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Display name")
    price: float = Field(..., description="Unit price")
    stock: int = Field(..., description="Units on hand")
    category: str = Field(..., min_length=1, description="Catalog category")


class ProductChanges(BaseModel):
    """A partial set of product fields for an update.

    Only keys present in the input are applied. An explicit null is
    rejected for every field, since all product fields are required.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1)
    price: float | None = None
    stock: int | None = None
    category: str | None = Field(default=None, min_length=1)

    @field_validator("name", "price", "stock", "category", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field may not be null")
        return v

    def as_dict(self) -> dict[str, Any]:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class Product(BaseModel):
    """A catalog item."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4, description="Server-generated identifier")
    name: str
    price: float
    stock: int
    category: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def create(cls, fields: ProductFields, now: datetime | None = None) -> "Product":
        """Create a new product with a fresh id and matching timestamps."""
        timestamp = now or utc_now()
        return cls(
            **fields.model_dump(),
            created_at=timestamp,
            updated_at=timestamp,
        )

    def apply(self, changes: ProductChanges, now: datetime | None = None) -> "Product":
        """Return a copy with changes applied and updated_at refreshed.

        updated_at always moves strictly forward, even when the clock
        has not advanced since the previous write.
        """
        timestamp = now or utc_now()
        if timestamp <= self.updated_at:
            timestamp = self.updated_at + timedelta(microseconds=1)
        return self.model_copy(update={**changes.as_dict(), "updated_at": timestamp})


def _field_errors(exc: PydanticValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    seen: set[str] = set()
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "body"
        if field in seen:
            continue
        seen.add(field)
        message = "Field required" if error["type"] == "missing" else error["msg"]
        errors.append(FieldError(field=field, message=message))
    return errors


def validate_fields(data: Mapping[str, Any]) -> ProductFields:
    """Validate a full product payload.

    Raises:
        ValidationError: listing every missing or invalid field
    """
    try:
        return ProductFields.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(_field_errors(e)) from e


def validate_changes(data: Mapping[str, Any]) -> ProductChanges:
    """Validate a partial product payload.

    Raises:
        ValidationError: listing every invalid field
    """
    try:
        return ProductChanges.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(_field_errors(e)) from e
