"""Configuration section models."""

from stockroom.config.models.api import APIConfig
from stockroom.config.models.client import ClientConfig
from stockroom.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
    TracingConfig,
)
from stockroom.config.models.storage import PostgresConfig, StorageConfig

__all__ = [
    "APIConfig",
    "ClientConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "PostgresConfig",
    "StorageConfig",
    "TracingConfig",
]
