"""
Learner archives: one immutable roster snapshot per closed academic year.

Archives are only ever written by the academic-year rollover (see
api.academic_year.service); this module reads them and builds the snapshots.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.learners.schemas import LearnerResponse
from school_admin.core.exceptions import STORE_ERRORS, store_error
from school_admin.core.models import Learner, LearnerArchive

logger = logging.getLogger(__name__)


def snapshot_learner(learner: Learner) -> Dict[str, Any]:
    """Plain JSON copy of a learner in API form. Later changes to the row do not affect it."""
    return LearnerResponse.model_validate(learner).model_dump(mode="json", by_alias=True)


async def get_archive(db: AsyncSession, year: int) -> Optional[LearnerArchive]:
    result = await db.execute(select(LearnerArchive).where(LearnerArchive.year == year))
    return result.scalar_one_or_none()


async def add_archive(db: AsyncSession, year: int, learners: Sequence[Learner]) -> LearnerArchive:
    """Stage and flush an archive for `year`. The caller owns the transaction."""
    archive = LearnerArchive(year=year, learners=[snapshot_learner(learner) for learner in learners])
    db.add(archive)
    await db.flush()
    logger.info("Archived %d learners for year %d", len(archive.learners), year)
    return archive


async def list_archived_years(db: AsyncSession) -> List[int]:
    try:
        result = await db.execute(select(LearnerArchive.year).order_by(LearnerArchive.year))
        years = list(result.scalars().all())
    except STORE_ERRORS as e:
        logger.exception("Error fetching archived years")
        raise store_error(e, "Failed to fetch learner archives")
    logger.info("Fetched archived years: %s", years)
    return years


async def get_archived_learners(db: AsyncSession, year: int) -> Optional[List[Dict[str, Any]]]:
    try:
        archive = await get_archive(db, year)
    except STORE_ERRORS as e:
        logger.exception("Error fetching archive for year %d", year)
        raise store_error(e, "Failed to fetch learner archives")
    if not archive:
        logger.info("Archive for year %d not found", year)
        return None
    return list(archive.learners)
