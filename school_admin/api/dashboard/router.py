"""Dashboard summary router."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.dependencies import get_connection
from school_admin.core.exceptions import ServiceError, StoreUnavailableError
from school_admin.db.connection import ConnectionManager
from school_admin.db.session import get_db

from .schemas import DashboardResponse
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(get_connection),
) -> DashboardResponse:
    """Counts and current term. Zeros and default term while the record store is unreachable."""
    if not connection.is_ready:
        logger.info("Record store is not connected. Returning empty dashboard.")
        return service.empty_dashboard()
    try:
        return await service.get_dashboard(db)
    except StoreUnavailableError:
        await connection.mark_unavailable()
        return service.empty_dashboard()
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
