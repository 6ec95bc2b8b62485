"""HTTP middleware."""

from stockroom.api.middleware.context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
