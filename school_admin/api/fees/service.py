"""Fee service layer. Every fee must reference an existing learner by admission number."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.learners.service import ensure_learner_exists
from school_admin.core.exceptions import STORE_ERRORS, store_error
from school_admin.core.models import Fee

from .schemas import FeeCreate, FeeResponse, FeeUpdate

logger = logging.getLogger(__name__)


def _to_response(fee: Fee) -> FeeResponse:
    return FeeResponse(
        id=fee.id,
        admission_no=fee.admission_no,
        term=fee.term,
        amount_paid=fee.amount_paid,
        balance=fee.balance,
    )


async def list_fees(db: AsyncSession) -> List[FeeResponse]:
    try:
        result = await db.execute(select(Fee).order_by(Fee.admission_no, Fee.term))
        fees = [_to_response(fee) for fee in result.scalars().all()]
    except STORE_ERRORS as e:
        logger.exception("Error fetching fees")
        raise store_error(e, "Failed to fetch fees")
    logger.info("Fetched %d fees", len(fees))
    return fees


async def total_fees_paid(db: AsyncSession) -> float:
    try:
        result = await db.execute(select(func.coalesce(func.sum(Fee.amount_paid), 0)))
        return float(result.scalar_one())
    except STORE_ERRORS as e:
        logger.exception("Error summing fees paid")
        raise store_error(e, "Failed to fetch fees")


async def create_fee(db: AsyncSession, payload: FeeCreate) -> FeeResponse:
    admission_no = payload.admission_no.strip()
    try:
        await ensure_learner_exists(db, admission_no)
        fee = Fee(
            admission_no=admission_no,
            term=payload.term.value,
            amount_paid=payload.amount_paid,
            balance=payload.balance,
        )
        db.add(fee)
        await db.commit()
        await db.refresh(fee)
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error adding fee for %s", admission_no)
        raise store_error(e, "Failed to add fee")
    logger.info("Fee added for %s (%s): paid=%s balance=%s", fee.admission_no, fee.term, fee.amount_paid, fee.balance)
    return _to_response(fee)


async def update_fee(db: AsyncSession, fee_id: UUID, payload: FeeUpdate) -> Optional[FeeResponse]:
    try:
        fee = await db.get(Fee, fee_id)
        if not fee:
            logger.info("Fee with ID %s not found", fee_id)
            return None
        if payload.admission_no is not None:
            admission_no = payload.admission_no.strip()
            await ensure_learner_exists(db, admission_no)
            fee.admission_no = admission_no
        if payload.term is not None:
            fee.term = payload.term.value
        if payload.amount_paid is not None:
            fee.amount_paid = payload.amount_paid
        if payload.balance is not None:
            fee.balance = payload.balance
        await db.commit()
        await db.refresh(fee)
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error updating fee %s", fee_id)
        raise store_error(e, "Failed to update fee")
    logger.info("Fee %s updated", fee_id)
    return _to_response(fee)


async def delete_fee(db: AsyncSession, fee_id: UUID) -> bool:
    try:
        fee = await db.get(Fee, fee_id)
        if not fee:
            logger.info("Fee with ID %s not found", fee_id)
            return False
        await db.delete(fee)
        await db.commit()
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error deleting fee %s", fee_id)
        raise store_error(e, "Failed to delete fee")
    logger.info("Fee %s deleted", fee_id)
    return True
