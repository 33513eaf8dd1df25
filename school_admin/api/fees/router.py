"""Fees router."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.dependencies import get_connection, require_store, service_http_error
from school_admin.core.exceptions import ServiceError, StoreUnavailableError
from school_admin.core.utils import parse_id
from school_admin.db.connection import ConnectionManager
from school_admin.db.session import get_db

from .schemas import FeeCreate, FeeResponse, FeeUpdate
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fees", tags=["fees"])


@router.get("", response_model=List[FeeResponse])
async def list_fees(
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(get_connection),
) -> List[FeeResponse]:
    """All fee records. Empty list while the record store is unreachable."""
    if not connection.is_ready:
        logger.info("Record store is not connected. Returning empty fees list.")
        return []
    try:
        return await service.list_fees(db)
    except StoreUnavailableError:
        await connection.mark_unavailable()
        return []
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=FeeResponse)
async def create_fee(
    payload: FeeCreate,
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> FeeResponse:
    try:
        return await service.create_fee(db, payload)
    except ServiceError as e:
        raise await service_http_error(e, connection)


@router.put("", response_model=FeeResponse)
async def update_fee(
    payload: FeeUpdate,
    fee_id: str = Query(..., alias="id"),
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> FeeResponse:
    try:
        fee = None
        parsed = parse_id(fee_id)
        if parsed:
            fee = await service.update_fee(db, parsed, payload)
        if not fee:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fee not found")
        return fee
    except ServiceError as e:
        raise await service_http_error(e, connection)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fee(
    fee_id: str = Query(..., alias="id"),
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> Response:
    parsed = parse_id(fee_id)
    try:
        deleted = bool(parsed) and await service.delete_fee(db, parsed)
    except ServiceError as e:
        raise await service_http_error(e, connection)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fee not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
