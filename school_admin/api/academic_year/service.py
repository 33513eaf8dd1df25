"""
Academic-year rollover.

Moves the school from one academic year to the next in a single transaction:
1. read term settings (must exist),
2. archive a snapshot of every current learner under the current year,
3. advance each learner one grade; learners in the terminal grade are removed,
4. bump the year and reset the term to Term 1,
5. commit once.

Any failure rolls the whole transaction back, so the store is either fully in
the old year or fully in the new one. A year that already has an archive is
refused, which makes repeated calls harmless.
"""

import asyncio
import logging

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.learner_archives.service import add_archive, get_archive
from school_admin.api.term_settings.service import get_term_settings_row
from school_admin.core.exceptions import STORE_ERRORS, ServiceError, store_error
from school_admin.core.grades import FIRST_TERM, GRADE_ORDER, is_terminal, next_grade
from school_admin.core.models import Learner

from .schemas import NewAcademicYearResponse

logger = logging.getLogger(__name__)

# Serializes rollovers within this process; the unique archive year covers other processes.
_rollover_lock = asyncio.Lock()


async def _rollover(db: AsyncSession) -> NewAcademicYearResponse:
    term_settings = await get_term_settings_row(db)
    if not term_settings:
        logger.info("Term settings not found")
        raise ServiceError("Term settings not found", status.HTTP_400_BAD_REQUEST)

    current_year = term_settings.current_year
    if await get_archive(db, current_year):
        logger.warning("Academic year %d has already been archived; refusing to roll over again", current_year)
        raise ServiceError(
            f"Academic year {current_year} has already been archived",
            status.HTTP_409_CONFLICT,
        )

    result = await db.execute(select(Learner).order_by(Learner.admission_no))
    learners = list(result.scalars().all())

    logger.info("Archiving learners for year %d...", current_year)
    await add_archive(db, current_year, learners)

    promoted = graduated = unchanged = 0
    for learner in learners:
        if learner.grade not in GRADE_ORDER:
            logger.warning("Learner %s has unknown grade %r; left unchanged", learner.admission_no, learner.grade)
            unchanged += 1
            continue
        if is_terminal(learner.grade):
            logger.info("Removing learner %s (completed %s)", learner.admission_no, learner.grade)
            await db.delete(learner)
            graduated += 1
        else:
            following = next_grade(learner.grade)
            logger.info("Updating grade for learner %s to %s", learner.admission_no, following)
            learner.grade = following
            promoted += 1

    term_settings.current_year = current_year + 1
    term_settings.current_term = FIRST_TERM
    logger.info("Updating term settings to %s %d", FIRST_TERM, current_year + 1)

    await db.commit()
    return NewAcademicYearResponse(
        archived_year=current_year,
        current_year=current_year + 1,
        current_term=FIRST_TERM,
        archived_learners=len(learners),
        promoted_learners=promoted,
        graduated_learners=graduated,
        unchanged_learners=unchanged,
    )


async def start_new_academic_year(db: AsyncSession) -> NewAcademicYearResponse:
    """Run the rollover. Raises ServiceError (400, 409 or 500); on any error nothing is changed."""
    async with _rollover_lock:
        logger.info("Starting new academic year...")
        try:
            outcome = await _rollover(db)
        except ServiceError:
            await db.rollback()
            raise
        except IntegrityError:
            await db.rollback()
            logger.exception("Rollover conflicted with a concurrent rollover")
            raise ServiceError(
                "Academic year has already been archived",
                status.HTTP_409_CONFLICT,
            )
        except STORE_ERRORS as e:
            await db.rollback()
            logger.exception("Error starting new academic year")
            raise store_error(e, "Failed to start new academic year")
        logger.info(
            "New academic year %d started: %d promoted, %d graduated",
            outcome.current_year,
            outcome.promoted_learners,
            outcome.graduated_learners,
        )
        return outcome
