"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, and route registration.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from pydantic import ValidationError

from stockroom import __version__
from stockroom.api.dependencies import (
    close_dependencies,
    get_postgres_pool,
    get_settings,
    use_settings,
)
from stockroom.api.exceptions import StockroomAPIError
from stockroom.api.middleware.context import RequestContextMiddleware
from stockroom.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from stockroom.api.routes import register_routes
from stockroom.config.settings import Settings
from stockroom.observability.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect the database pool on startup and release it on shutdown."""
    settings: Settings = app.state.settings
    if settings.storage.backend == "postgres":
        await get_postgres_pool().connect()

    logger.info("app_started", backend=settings.storage.backend)
    try:
        yield
    finally:
        await close_dependencies()
        logger.info("app_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; loaded from configuration when omitted

    Returns:
        Configured FastAPI application
    """
    if settings is not None:
        use_settings(settings)
    settings = get_settings()

    app = FastAPI(
        title="Stockroom API",
        description="Product catalog with an append-only audit trail",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)

    metrics = settings.observability.metrics
    register_routes(
        app,
        prefix=settings.api.prefix,
        metrics_path=metrics.path if metrics.enabled else None,
    )

    if settings.observability.tracing.enabled:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("opentelemetry_instrumentation_enabled")

    logger.info("app_created", debug=settings.debug, backend=settings.storage.backend)

    return app


def _error_response(
    status_code: int,
    code: ErrorCode,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _field_name(loc: tuple[int | str, ...]) -> str:
    # Drop the "body" / "path" / "query" segment FastAPI puts first
    parts = [str(part) for part in loc]
    if parts and parts[0] in ("body", "path", "query"):
        parts = parts[1:]
    return ".".join(parts) or "body"


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(StockroomAPIError)
    async def stockroom_api_error_handler(
        request: Request, exc: StockroomAPIError
    ) -> JSONResponse:
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )
        return _error_response(exc.status_code, exc.error_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            ErrorDetail(field=_field_name(error["loc"]), message=error["msg"])
            for error in exc.errors()
        ]
        logger.warning(
            "validation_error",
            fields=[d.field for d in details],
            path=request.url.path,
        )
        return _error_response(
            400, ErrorCode.INVALID_REQUEST, "Request validation failed", details
        )

    @app.exception_handler(ValidationError)
    async def pydantic_validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        details = [
            ErrorDetail(field=_field_name(error["loc"]), message=error["msg"])
            for error in exc.errors()
        ]
        logger.warning("pydantic_validation_error", path=request.url.path)
        return _error_response(400, ErrorCode.INVALID_REQUEST, "Data validation failed", details)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(500, ErrorCode.INTERNAL_ERROR, "An unexpected error occurred")
