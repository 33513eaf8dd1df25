"""Learners router."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.dependencies import get_connection, require_store, service_http_error
from school_admin.core.exceptions import ServiceError, StoreUnavailableError
from school_admin.core.utils import parse_id
from school_admin.db.connection import ConnectionManager
from school_admin.db.session import get_db

from .schemas import LearnerCreate, LearnerResponse, LearnerUpdate
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/learners", tags=["learners"])


@router.get("", response_model=List[LearnerResponse])
async def list_learners(
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(get_connection),
) -> List[LearnerResponse]:
    """All learners. Empty list while the record store is unreachable."""
    if not connection.is_ready:
        logger.info("Record store is not connected. Returning empty learners list.")
        return []
    try:
        return await service.list_learners(db)
    except StoreUnavailableError:
        await connection.mark_unavailable()
        return []
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=LearnerResponse)
async def create_learner(
    payload: LearnerCreate,
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> LearnerResponse:
    try:
        return await service.create_learner(db, payload)
    except ServiceError as e:
        raise await service_http_error(e, connection)


@router.put("", response_model=LearnerResponse)
async def update_learner(
    payload: LearnerUpdate,
    learner_id: str = Query(..., alias="id"),
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> LearnerResponse:
    try:
        learner = None
        parsed = parse_id(learner_id)
        if parsed:
            learner = await service.update_learner(db, parsed, payload)
        if not learner:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Learner not found")
        return learner
    except ServiceError as e:
        raise await service_http_error(e, connection)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_learner(
    learner_id: str = Query(..., alias="id"),
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> Response:
    parsed = parse_id(learner_id)
    try:
        deleted = bool(parsed) and await service.delete_learner(db, parsed)
    except ServiceError as e:
        raise await service_http_error(e, connection)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Learner not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
