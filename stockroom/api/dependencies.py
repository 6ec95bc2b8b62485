"""Dependency injection for API routes.

Provides FastAPI dependencies for the stores and catalog services.
Backends are chosen from settings and can be overridden for testing
through app.dependency_overrides.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from stockroom.audit.store import AuditLog
from stockroom.audit.stores.inmemory import InMemoryAuditLog
from stockroom.audit.stores.postgres import PostgresAuditLog
from stockroom.catalog.coordinator import MutationCoordinator
from stockroom.catalog.queries import QueryService
from stockroom.catalog.store import ProductStore
from stockroom.catalog.stores.inmemory import InMemoryProductStore
from stockroom.catalog.stores.postgres import PostgresProductStore
from stockroom.config.loader import read_layers
from stockroom.config.settings import Settings, set_toml_config
from stockroom.db.pool import PostgresPool
from stockroom.observability.logging import get_logger

logger = get_logger(__name__)

# Shared instances, created on first use and released by close_dependencies()
_postgres_pool: PostgresPool | None = None
_product_store: ProductStore | None = None
_audit_log: AuditLog | None = None
_settings: Settings | None = None


def use_settings(settings: Settings | None) -> None:
    """Pin the settings used by every dependency; None unpins them."""
    global _settings
    _settings = settings


def get_settings() -> Settings:
    """Get application settings.

    Returns the pinned settings when create_app was given some, otherwise
    loads them from configuration.
    """
    if _settings is not None:
        return _settings
    return _load_settings()


@lru_cache
def _load_settings() -> Settings:
    """Load configuration from TOML files and environment variables.

    Cached to avoid reloading on every request.
    """
    try:
        layers = read_layers()
    except FileNotFoundError:
        logger.warning("config_file_not_found", msg="Using default configuration")
        set_toml_config({})
    else:
        set_toml_config(layers.values)
        logger.info(
            "config_loaded",
            environment=layers.environment,
            files=[str(path) for path in layers.files],
        )

    return Settings()


def get_postgres_pool() -> PostgresPool:
    """Get the shared PostgreSQL pool (connects lazily on first acquire)."""
    global _postgres_pool
    if _postgres_pool is None:
        _postgres_pool = PostgresPool.from_config(get_settings().storage.postgres)
    return _postgres_pool


def get_product_store() -> ProductStore:
    """Get the ProductStore for the configured backend."""
    global _product_store
    if _product_store is None:
        backend = get_settings().storage.backend
        if backend == "postgres":
            _product_store = PostgresProductStore(get_postgres_pool())
        else:
            _product_store = InMemoryProductStore()
        logger.info("product_store_initialized", backend=backend)
    return _product_store


def get_audit_log() -> AuditLog:
    """Get the AuditLog for the configured backend."""
    global _audit_log
    if _audit_log is None:
        backend = get_settings().storage.backend
        if backend == "postgres":
            _audit_log = PostgresAuditLog(get_postgres_pool())
        else:
            _audit_log = InMemoryAuditLog()
        logger.info("audit_log_initialized", backend=backend)
    return _audit_log


ProductStoreDep = Annotated[ProductStore, Depends(get_product_store)]
AuditLogDep = Annotated[AuditLog, Depends(get_audit_log)]


def get_coordinator(store: ProductStoreDep, audit_log: AuditLogDep) -> MutationCoordinator:
    """Build the mutation coordinator over the shared stores."""
    return MutationCoordinator(store, audit_log)


def get_query_service(store: ProductStoreDep, audit_log: AuditLogDep) -> QueryService:
    """Build the query service over the shared stores."""
    return QueryService(store, audit_log)


async def close_dependencies() -> None:
    """Release shared resources; the next request recreates them."""
    global _postgres_pool, _product_store, _audit_log
    if _postgres_pool is not None:
        await _postgres_pool.close()
    _postgres_pool = None
    _product_store = None
    _audit_log = None


SettingsDep = Annotated[Settings, Depends(get_settings)]
CoordinatorDep = Annotated[MutationCoordinator, Depends(get_coordinator)]
QueryServiceDep = Annotated[QueryService, Depends(get_query_service)]
