"""Unit tests for StockroomClient over a mocked transport."""

import json
from uuid import uuid4

import httpx
import pytest

from stockroom.client import StockroomClient, StockroomClientError
from stockroom.config.models.client import ClientConfig


def _product_payload(**overrides) -> dict:
    payload = {
        "id": str(uuid4()),
        "name": "Widget",
        "price": 9.99,
        "stock": 5,
        "category": "Tools",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    }
    payload.update(overrides)
    return payload


def _client(handler) -> StockroomClient:
    return StockroomClient("http://stockroom.test", transport=httpx.MockTransport(handler))


class TestStockroomClient:
    """Tests for request building and envelope handling."""

    @pytest.mark.asyncio
    async def test_create_posts_fields(self) -> None:
        """create_product posts the payload and parses the envelope."""
        seen: list[httpx.Request] = []
        payload = _product_payload()

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"success": True, "data": payload})

        async with _client(handler) as client:
            product = await client.create_product(
                {"name": "Widget", "price": 9.99, "stock": 5, "category": "Tools"}
            )

        assert seen[0].method == "POST"
        assert seen[0].url.path == "/api/products"
        assert json.loads(seen[0].content)["name"] == "Widget"
        assert str(product.id) == payload["id"]

    @pytest.mark.asyncio
    async def test_list_audit_records(self) -> None:
        record = {
            "id": str(uuid4()),
            "action_type": "Added",
            "product_id": str(uuid4()),
            "product_name": "Widget",
            "timestamp": "2024-01-01T00:00:00Z",
        }

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/logs"
            return httpx.Response(200, json={"success": True, "count": 1, "data": [record]})

        async with _client(handler) as client:
            records = await client.list_audit_records()

        assert [r.product_name for r in records] == ["Widget"]

    @pytest.mark.asyncio
    async def test_error_envelope_raises(self) -> None:
        """A non-2xx response carries the server's message and details."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={
                    "success": False,
                    "error": {
                        "code": "INVALID_REQUEST",
                        "message": "Invalid product fields: name",
                        "details": [{"field": "name", "message": "Field required"}],
                    },
                },
            )

        async with _client(handler) as client:
            with pytest.raises(StockroomClientError) as exc_info:
                await client.create_product({"price": 1})

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid product fields: name"
        assert exc_info.value.details[0]["field"] == "name"

    @pytest.mark.asyncio
    async def test_plain_string_error_raises(self) -> None:
        """An error given as a bare string becomes the message."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"success": False, "error": "Server Error"})

        async with _client(handler) as client:
            with pytest.raises(StockroomClientError) as exc_info:
                await client.list_products()

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Server Error"
        assert exc_info.value.details is None

    @pytest.mark.asyncio
    async def test_unexpected_payload_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[1, 2, 3])

        async with _client(handler) as client:
            with pytest.raises(StockroomClientError, match="Unexpected response payload"):
                await client.list_products()

    @pytest.mark.asyncio
    async def test_malformed_item_raises(self) -> None:
        """Items that do not parse are reported as client errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": True, "data": {"id": "nope"}})

        async with _client(handler) as client:
            with pytest.raises(StockroomClientError, match="Malformed ProductResponse"):
                await client.get_product(uuid4())

    @pytest.mark.asyncio
    async def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(StockroomClientError) as exc_info:
                await client.list_products()

        assert exc_info.value.status_code is None

    def test_from_config(self) -> None:
        client = StockroomClient.from_config(ClientConfig(base_url="http://shop.test/"))
        assert client.base_url == "http://shop.test"
        assert client.prefix == "/api"
