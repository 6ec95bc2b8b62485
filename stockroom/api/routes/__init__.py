"""API route registration."""

from fastapi import APIRouter, FastAPI

from stockroom.observability.logging import get_logger

logger = get_logger(__name__)


def create_catalog_router(prefix: str = "/api") -> APIRouter:
    """Create the router for product and audit log endpoints.

    Args:
        prefix: Path prefix shared by the catalog routes
    """
    router = APIRouter(prefix=prefix)

    from stockroom.api.routes.logs import router as logs_router
    from stockroom.api.routes.products import router as products_router

    router.include_router(products_router, tags=["Products"])
    router.include_router(logs_router, tags=["Audit Log"])

    return router


def register_routes(
    app: FastAPI,
    prefix: str = "/api",
    metrics_path: str | None = "/metrics",
) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        prefix: Path prefix for catalog routes
        metrics_path: Where to expose Prometheus metrics; None disables them
    """
    app.include_router(create_catalog_router(prefix))

    from stockroom.api.routes.health import get_metrics
    from stockroom.api.routes.health import router as health_router

    app.include_router(health_router, tags=["Health"])
    if metrics_path:
        app.add_api_route(metrics_path, get_metrics, methods=["GET"], tags=["Health"])

    logger.info("routes_registered", prefix=prefix, metrics_path=metrics_path)
