"""Fee structure router (singleton)."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.dependencies import get_connection, require_store, service_http_error
from school_admin.core.exceptions import ServiceError, StoreUnavailableError
from school_admin.db.connection import ConnectionManager
from school_admin.db.session import get_db

from .schemas import FeeStructureBody, FeeStructureResponse
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feeStructure", tags=["fee-structure"])


@router.get("", response_model=FeeStructureResponse, response_model_exclude_none=True)
async def get_fee_structure(
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(get_connection),
) -> FeeStructureResponse:
    """Fee per grade. `{}` when nothing is saved or the record store is unreachable."""
    if not connection.is_ready:
        logger.info("Record store is not connected. Returning empty fee structure.")
        return FeeStructureResponse()
    try:
        return await service.get_fee_structure(db)
    except StoreUnavailableError:
        await connection.mark_unavailable()
        return FeeStructureResponse()
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=FeeStructureResponse, response_model_exclude_none=True)
async def save_fee_structure(
    payload: FeeStructureBody,
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> FeeStructureResponse:
    try:
        return await service.save_fee_structure(db, payload)
    except ServiceError as e:
        raise await service_http_error(e, connection)
