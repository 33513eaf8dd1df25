"""Fee structure singleton: read or upsert the single row."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import STORE_ERRORS, store_error
from school_admin.core.grades import FEE_STRUCTURE_KEYS
from school_admin.core.models import FeeStructure
from school_admin.core.models.fee_structure import SINGLETON_KEY

from .schemas import FeeStructureBody, FeeStructureResponse

logger = logging.getLogger(__name__)


def _to_response(fs: FeeStructure) -> FeeStructureResponse:
    return FeeStructureResponse(id=fs.id, **{key: getattr(fs, key) for key in FEE_STRUCTURE_KEYS})


async def _get_row(db: AsyncSession) -> Optional[FeeStructure]:
    result = await db.execute(select(FeeStructure).where(FeeStructure.singleton_key == SINGLETON_KEY))
    return result.scalar_one_or_none()


async def get_fee_structure(db: AsyncSession) -> FeeStructureResponse:
    """Stored fee structure, or an empty one when none has been saved yet."""
    try:
        fs = await _get_row(db)
    except STORE_ERRORS as e:
        logger.exception("Error fetching fee structure")
        raise store_error(e, "Failed to fetch fee structure")
    if not fs:
        logger.info("No fee structure saved yet")
        return FeeStructureResponse()
    return _to_response(fs)


async def save_fee_structure(db: AsyncSession, payload: FeeStructureBody) -> FeeStructureResponse:
    """Create the fee structure on first save; afterwards update only the supplied grades."""
    changes = payload.model_dump(exclude_unset=True)
    try:
        fs = await _get_row(db)
        if fs:
            logger.info("Updating existing fee structure: %s", changes)
            for key, value in changes.items():
                setattr(fs, key, value)
        else:
            logger.info("Creating fee structure: %s", changes)
            fs = FeeStructure(singleton_key=SINGLETON_KEY, **changes)
            db.add(fs)
        await db.commit()
        await db.refresh(fs)
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error saving fee structure")
        raise store_error(e, "Failed to save fee structure")
    return _to_response(fs)
