"""Learner archives router (read-only)."""

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.dependencies import get_connection
from school_admin.core.exceptions import ServiceError, StoreUnavailableError
from school_admin.db.connection import ConnectionManager
from school_admin.db.session import get_db

from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/learnerArchives", tags=["learner-archives"])


@router.get("", response_model=Union[List[int], List[Dict[str, Any]]])
async def read_learner_archives(
    year: Optional[int] = Query(None, description="Return the archived learners of this year"),
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(get_connection),
):
    """Without `year`: archived years, ascending. With `year`: that year's learner snapshot, 404 if none."""
    if not connection.is_ready:
        logger.info("Record store is not connected. Returning empty archive list.")
        return []
    try:
        if year is None:
            return await service.list_archived_years(db)
        learners = await service.get_archived_learners(db, year)
    except StoreUnavailableError:
        await connection.mark_unavailable()
        return []
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    if learners is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Archive not found")
    return learners
