"""Books issued to learners."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.learners.service import ensure_learner_exists
from school_admin.core.exceptions import STORE_ERRORS, store_error
from school_admin.core.models import Book

from .schemas import BookCreate, BookResponse, BookUpdate

logger = logging.getLogger(__name__)


def _to_response(book: Book) -> BookResponse:
    return BookResponse(
        id=book.id,
        admission_no=book.admission_no,
        subject=book.subject,
        book_title=book.book_title,
    )


async def list_books(db: AsyncSession) -> List[BookResponse]:
    try:
        result = await db.execute(select(Book).order_by(Book.admission_no, Book.subject))
        books = [_to_response(book) for book in result.scalars().all()]
    except STORE_ERRORS as e:
        logger.exception("Error fetching books")
        raise store_error(e, "Failed to fetch books")
    logger.info("Fetched %d books", len(books))
    return books


async def count_books(db: AsyncSession) -> int:
    try:
        result = await db.execute(select(func.count(Book.id)))
        return result.scalar_one()
    except STORE_ERRORS as e:
        logger.exception("Error counting books")
        raise store_error(e, "Failed to count books")


async def create_book(db: AsyncSession, payload: BookCreate) -> BookResponse:
    admission_no = payload.admission_no.strip()
    try:
        await ensure_learner_exists(db, admission_no)
        book = Book(
            admission_no=admission_no,
            subject=payload.subject.strip(),
            book_title=payload.book_title.strip(),
        )
        db.add(book)
        await db.commit()
        await db.refresh(book)
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error adding book for %s", admission_no)
        raise store_error(e, "Failed to add book")
    logger.info("Book '%s' issued to %s", book.book_title, book.admission_no)
    return _to_response(book)


async def update_book(db: AsyncSession, book_id: UUID, payload: BookUpdate) -> Optional[BookResponse]:
    try:
        book = await db.get(Book, book_id)
        if not book:
            logger.info("Book with ID %s not found", book_id)
            return None
        if payload.admission_no is not None:
            admission_no = payload.admission_no.strip()
            await ensure_learner_exists(db, admission_no)
            book.admission_no = admission_no
        if payload.subject is not None:
            book.subject = payload.subject.strip()
        if payload.book_title is not None:
            book.book_title = payload.book_title.strip()
        await db.commit()
        await db.refresh(book)
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error updating book %s", book_id)
        raise store_error(e, "Failed to update book")
    logger.info("Book %s updated", book_id)
    return _to_response(book)


async def delete_book(db: AsyncSession, book_id: UUID) -> bool:
    try:
        book = await db.get(Book, book_id)
        if not book:
            logger.info("Book with ID %s not found", book_id)
            return False
        await db.delete(book)
        await db.commit()
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error deleting book %s", book_id)
        raise store_error(e, "Failed to delete book")
    logger.info("Book %s deleted", book_id)
    return True
