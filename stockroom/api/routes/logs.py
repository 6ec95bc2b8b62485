"""Audit log endpoints."""

from uuid import UUID

from fastapi import APIRouter

from stockroom.api.dependencies import QueryServiceDep
from stockroom.api.exceptions import from_store_error
from stockroom.api.models.crud import AuditRecordResponse, ListResponse
from stockroom.db.errors import StoreError

router = APIRouter(prefix="/logs")


@router.get("", response_model=ListResponse[AuditRecordResponse])
async def list_audit_records(
    queries: QueryServiceDep,
    product_id: UUID | None = None,
) -> ListResponse[AuditRecordResponse]:
    """List audit records newest first, optionally filtered to one product."""
    try:
        records = await queries.list_audit_records(product_id)
    except StoreError as e:
        raise from_store_error(e) from e

    items = [AuditRecordResponse.from_record(r) for r in records]
    return ListResponse[AuditRecordResponse](count=len(items), data=items)
