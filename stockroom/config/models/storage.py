"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["inmemory", "postgres"]


class PostgresConfig(BaseModel):
    """PostgreSQL connection settings shared by both stores."""

    dsn: str | None = Field(
        default=None,
        description="Connection URL (falls back to STOCKROOM_DATABASE_URL / DATABASE_URL)",
    )
    min_pool_size: int = Field(default=2, gt=0, description="Minimum connections to keep open")
    max_pool_size: int = Field(default=10, gt=0, description="Maximum connections in pool")
    command_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Default timeout for queries (seconds)",
    )


class StorageConfig(BaseModel):
    """Storage configuration for the product store and the audit log."""

    backend: BackendType = Field(default="inmemory", description="Backend type")
    postgres: PostgresConfig = Field(
        default_factory=PostgresConfig,
        description="PostgreSQL settings (used when backend is postgres)",
    )
