"""Class book inventory service layer."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import STORE_ERRORS, store_error
from school_admin.core.models import ClassBook

from .schemas import ClassBookCreate, ClassBookResponse, ClassBookUpdate

logger = logging.getLogger(__name__)


def _to_response(cb: ClassBook) -> ClassBookResponse:
    return ClassBookResponse(
        id=cb.id,
        book_number=cb.book_number,
        subject=cb.subject,
        description=cb.description,
        total_books=cb.total_books,
    )


async def list_class_books(db: AsyncSession) -> List[ClassBookResponse]:
    try:
        result = await db.execute(select(ClassBook).order_by(ClassBook.book_number))
        class_books = [_to_response(cb) for cb in result.scalars().all()]
    except STORE_ERRORS as e:
        logger.exception("Error fetching class books")
        raise store_error(e, "Failed to fetch class books")
    logger.info("Fetched %d class books", len(class_books))
    return class_books


async def count_class_books(db: AsyncSession) -> int:
    try:
        result = await db.execute(select(func.count(ClassBook.id)))
        return result.scalar_one()
    except STORE_ERRORS as e:
        logger.exception("Error counting class books")
        raise store_error(e, "Failed to count class books")


async def create_class_book(db: AsyncSession, payload: ClassBookCreate) -> ClassBookResponse:
    cb = ClassBook(
        book_number=payload.book_number.strip(),
        subject=payload.subject.strip(),
        description=payload.description.strip(),
        total_books=payload.total_books,
    )
    try:
        db.add(cb)
        await db.commit()
        await db.refresh(cb)
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error adding class book %s", cb.book_number)
        raise store_error(e, "Failed to add class book")
    logger.info("Class book %s added (%d copies)", cb.book_number, cb.total_books)
    return _to_response(cb)


async def update_class_book(
    db: AsyncSession,
    class_book_id: UUID,
    payload: ClassBookUpdate,
) -> Optional[ClassBookResponse]:
    try:
        cb = await db.get(ClassBook, class_book_id)
        if not cb:
            logger.info("Class book with ID %s not found", class_book_id)
            return None
        if payload.book_number is not None:
            cb.book_number = payload.book_number.strip()
        if payload.subject is not None:
            cb.subject = payload.subject.strip()
        if payload.description is not None:
            cb.description = payload.description.strip()
        if payload.total_books is not None:
            cb.total_books = payload.total_books
        await db.commit()
        await db.refresh(cb)
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error updating class book %s", class_book_id)
        raise store_error(e, "Failed to update class book")
    logger.info("Class book %s updated", cb.book_number)
    return _to_response(cb)


async def delete_class_book(db: AsyncSession, class_book_id: UUID) -> bool:
    try:
        cb = await db.get(ClassBook, class_book_id)
        if not cb:
            logger.info("Class book with ID %s not found", class_book_id)
            return False
        book_number = cb.book_number
        await db.delete(cb)
        await db.commit()
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error deleting class book %s", class_book_id)
        raise store_error(e, "Failed to delete class book")
    logger.info("Class book %s deleted", book_number)
    return True
