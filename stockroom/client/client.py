"""Stockroom API client.

Provides an async Python client for the Stockroom HTTP API.

Usage:
    from stockroom.client import StockroomClient

    async with StockroomClient("http://localhost:5000") as client:
        product = await client.create_product(
            {"name": "Widget", "price": 9.99, "stock": 5, "category": "Tools"}
        )
        records = await client.list_audit_records()
"""

from typing import Any, TypeVar
from uuid import UUID

import httpx
from pydantic import BaseModel, ValidationError

from stockroom.api.models.crud import AuditRecordResponse, ProductResponse
from stockroom.config.models.client import ClientConfig

M = TypeVar("M", bound=BaseModel)


class StockroomClientError(Exception):
    """Raised for failed requests: non-2xx status, bad payload or transport error."""

    def __init__(self, message: str, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class StockroomClient:
    """Async client for the Stockroom API.

    Attributes:
        base_url: Base URL of the Stockroom API
        prefix: Path prefix of the catalog routes
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout: float = 10.0,
        prefix: str = "/api",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the Stockroom API
            timeout: Request timeout in seconds
            prefix: Path prefix of the catalog routes
            transport: Custom httpx transport (e.g. httpx.ASGITransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.prefix = prefix.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "StockroomClient":
        """Create a client from the `client` settings section."""
        return cls(base_url=config.base_url, timeout=config.timeout, **kwargs)

    async def __aenter__(self) -> "StockroomClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an API request and return the envelope's data."""
        try:
            response = await self._client.request(
                method=method,
                url=f"{self.prefix}{path}",
                headers={"Content-Type": "application/json"},
                json=json,
            )
        except httpx.HTTPError as e:
            raise StockroomClientError(f"Request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            error = body.get("error") if isinstance(body, dict) else None
            if isinstance(error, str):
                error = {"message": error}
            elif not isinstance(error, dict):
                error = {}
            raise StockroomClientError(
                message=error.get("message") or response.text or response.reason_phrase,
                status_code=response.status_code,
                details=error.get("details"),
            )

        if not isinstance(body, dict) or not body.get("success"):
            raise StockroomClientError(
                "Unexpected response payload",
                status_code=response.status_code,
                details=body,
            )
        return body.get("data")

    @staticmethod
    def _parse(model: type[M], data: Any) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise StockroomClientError(f"Malformed {model.__name__}", details=e.errors()) from e

    # Products
    async def list_products(self) -> list[ProductResponse]:
        """List all products."""
        data = await self._request("GET", "/products")
        return [self._parse(ProductResponse, p) for p in data or []]

    async def get_product(self, product_id: str | UUID) -> ProductResponse:
        """Get a product by ID."""
        data = await self._request("GET", f"/products/{product_id}")
        return self._parse(ProductResponse, data)

    async def create_product(self, fields: dict[str, Any]) -> ProductResponse:
        """Create a new product from name, price, stock and category."""
        data = await self._request("POST", "/products", json=fields)
        return self._parse(ProductResponse, data)

    async def update_product(
        self,
        product_id: str | UUID,
        changes: dict[str, Any],
    ) -> ProductResponse:
        """Update a product with a partial field set."""
        data = await self._request("PUT", f"/products/{product_id}", json=changes)
        return self._parse(ProductResponse, data)

    async def delete_product(self, product_id: str | UUID) -> None:
        """Delete a product."""
        await self._request("DELETE", f"/products/{product_id}")

    # Audit log
    async def list_audit_records(self) -> list[AuditRecordResponse]:
        """List all audit records, newest first."""
        data = await self._request("GET", "/logs")
        return [self._parse(AuditRecordResponse, r) for r in data or []]
