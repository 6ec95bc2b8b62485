"""Product catalog endpoints."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body

from stockroom.api.dependencies import CoordinatorDep, QueryServiceDep
from stockroom.api.exceptions import ProductNotFoundError, from_store_error
from stockroom.api.models.crud import (
    Ack,
    DataResponse,
    ListResponse,
    ProductResponse,
)
from stockroom.db.errors import StoreError
from stockroom.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/products")

# Bodies reach the coordinator unvalidated so that an unknown id is
# reported before anything about the payload
ProductBody = Annotated[dict[str, Any], Body()]


def _parse_id(product_id: str) -> UUID:
    """Treat a malformed id like an unknown one."""
    try:
        return UUID(product_id)
    except ValueError as e:
        raise ProductNotFoundError("No product found") from e


@router.get("", response_model=ListResponse[ProductResponse])
async def list_products(queries: QueryServiceDep) -> ListResponse[ProductResponse]:
    """List all products (unordered)."""
    try:
        products = await queries.list_products()
    except StoreError as e:
        raise from_store_error(e) from e

    items = [ProductResponse.from_product(p) for p in products]
    return ListResponse[ProductResponse](count=len(items), data=items)


@router.post("", response_model=DataResponse[ProductResponse], status_code=201)
async def create_product(
    body: ProductBody,
    coordinator: CoordinatorDep,
) -> DataResponse[ProductResponse]:
    """Create a product and record an Added audit entry."""
    logger.info("create_product_request", fields=sorted(body))

    try:
        product = await coordinator.add_product(body)
    except StoreError as e:
        raise from_store_error(e) from e

    return DataResponse[ProductResponse](data=ProductResponse.from_product(product))


@router.get("/{product_id}", response_model=DataResponse[ProductResponse])
async def get_product(
    product_id: str,
    queries: QueryServiceDep,
) -> DataResponse[ProductResponse]:
    """Get a product by ID."""
    try:
        product = await queries.get_product(_parse_id(product_id))
    except StoreError as e:
        raise from_store_error(e) from e

    return DataResponse[ProductResponse](data=ProductResponse.from_product(product))


@router.put("/{product_id}", response_model=DataResponse[ProductResponse])
async def update_product(
    product_id: str,
    body: ProductBody,
    coordinator: CoordinatorDep,
) -> DataResponse[ProductResponse]:
    """Apply the supplied fields to a product and record an Updated audit entry."""
    logger.info("update_product_request", product_id=product_id, fields=sorted(body))

    try:
        product = await coordinator.update_product(_parse_id(product_id), body)
    except StoreError as e:
        raise from_store_error(e) from e

    return DataResponse[ProductResponse](data=ProductResponse.from_product(product))


@router.delete("/{product_id}", response_model=DataResponse[Ack])
async def delete_product(
    product_id: str,
    coordinator: CoordinatorDep,
) -> DataResponse[Ack]:
    """Delete a product and record a Deleted audit entry."""
    logger.info("delete_product_request", product_id=product_id)

    try:
        await coordinator.delete_product(_parse_id(product_id))
    except StoreError as e:
        raise from_store_error(e) from e

    return DataResponse[Ack](data=Ack())
