"""Health check and metrics endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from stockroom import __version__
from stockroom.api.dependencies import SettingsDep, get_postgres_pool
from stockroom.api.models.health import ComponentHealth, HealthResponse
from stockroom.db.errors import StorageError
from stockroom.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


async def _check_postgres() -> ComponentHealth:
    try:
        latency_ms = await get_postgres_pool().ping()
    except StorageError as e:
        logger.warning("postgres_health_check_failed", error=e.message)
        return ComponentHealth(name="postgres", status="unhealthy", message=e.message)
    return ComponentHealth(name="postgres", status="healthy", latency_ms=latency_ms)


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Report service health and the health of the storage backend.

    The in-memory backend has nothing to check and is always healthy.
    """
    backend = settings.storage.backend
    if backend == "postgres":
        components = [await _check_postgres()]
    else:
        components = [ComponentHealth(name="inmemory", status="healthy")]

    status = "unhealthy" if any(c.status == "unhealthy" for c in components) else "healthy"
    logger.debug("health_check_completed", status=status)

    return HealthResponse(
        status=status,
        version=__version__,
        backend=backend,
        components=components,
        timestamp=datetime.now(UTC),
    )


async def get_metrics() -> Response:
    """Prometheus metrics in text format for scraping."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
