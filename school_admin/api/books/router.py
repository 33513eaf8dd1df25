"""Books router."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.dependencies import get_connection, require_store, service_http_error
from school_admin.core.exceptions import ServiceError, StoreUnavailableError
from school_admin.core.utils import parse_id
from school_admin.db.connection import ConnectionManager
from school_admin.db.session import get_db

from .schemas import BookCreate, BookResponse, BookUpdate
from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=List[BookResponse])
async def list_books(
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(get_connection),
) -> List[BookResponse]:
    """All issued books. Empty list while the record store is unreachable."""
    if not connection.is_ready:
        logger.info("Record store is not connected. Returning empty books list.")
        return []
    try:
        return await service.list_books(db)
    except StoreUnavailableError:
        await connection.mark_unavailable()
        return []
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=BookResponse)
async def create_book(
    payload: BookCreate,
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> BookResponse:
    try:
        return await service.create_book(db, payload)
    except ServiceError as e:
        raise await service_http_error(e, connection)


@router.put("", response_model=BookResponse)
async def update_book(
    payload: BookUpdate,
    book_id: str = Query(..., alias="id"),
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> BookResponse:
    try:
        book = None
        parsed = parse_id(book_id)
        if parsed:
            book = await service.update_book(db, parsed, payload)
        if not book:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
        return book
    except ServiceError as e:
        raise await service_http_error(e, connection)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(
    book_id: str = Query(..., alias="id"),
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> Response:
    parsed = parse_id(book_id)
    try:
        deleted = bool(parsed) and await service.delete_book(db, parsed)
    except ServiceError as e:
        raise await service_http_error(e, connection)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
