"""Term settings router (singleton)."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.dependencies import get_connection, require_store, service_http_error
from school_admin.core.exceptions import ServiceError, StoreUnavailableError
from school_admin.db.connection import ConnectionManager
from school_admin.db.session import get_db

from .schemas import TermSettingsBody, TermSettingsResponse
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/termSettings", tags=["term-settings"])


@router.get("", response_model=TermSettingsResponse, response_model_exclude_none=True)
async def get_term_settings(
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(get_connection),
) -> TermSettingsResponse:
    """Current term and year. Defaults to Term 1 of this year when nothing is saved or the store is unreachable."""
    if not connection.is_ready:
        logger.info("Record store is not connected. Returning default term settings.")
        return service.default_term_settings()
    try:
        return await service.get_term_settings(db)
    except StoreUnavailableError:
        await connection.mark_unavailable()
        return service.default_term_settings()
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=TermSettingsResponse, response_model_exclude_none=True)
async def save_term_settings(
    payload: TermSettingsBody,
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> TermSettingsResponse:
    try:
        return await service.save_term_settings(db, payload)
    except ServiceError as e:
        raise await service_http_error(e, connection)
