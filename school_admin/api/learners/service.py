"""Learner service layer."""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.config import settings
from school_admin.core.exceptions import STORE_ERRORS, ServiceError, store_error
from school_admin.core.models import Learner

from .schemas import LearnerCreate, LearnerResponse, LearnerUpdate

logger = logging.getLogger(__name__)


def _to_response(learner: Learner) -> LearnerResponse:
    return LearnerResponse.model_validate(learner)


def _admission_suffix(admission_no: str) -> Optional[int]:
    """Numeric part of an admission number such as MPA-014; None when there is none."""
    tail = admission_no.rsplit("-", 1)[-1]
    return int(tail) if tail.isdigit() else None


async def next_admission_no(db: AsyncSession, prefix: Optional[str] = None) -> str:
    """Admission number one above the highest numeric suffix in use, e.g. MPA-001 for an empty school."""
    prefix = prefix or settings.admission_no_prefix
    result = await db.execute(select(Learner.admission_no))
    suffixes = [_admission_suffix(no) for no in result.scalars().all()]
    highest = max((s for s in suffixes if s is not None), default=0)
    return f"{prefix}-{highest + 1:03d}"


async def _admission_no_taken(db: AsyncSession, admission_no: str, exclude_id: Optional[UUID] = None) -> bool:
    stmt = select(Learner.id).where(Learner.admission_no == admission_no)
    if exclude_id is not None:
        stmt = stmt.where(Learner.id != exclude_id)
    result = await db.execute(stmt)
    return result.first() is not None


async def get_learner_by_admission_no(db: AsyncSession, admission_no: str) -> Optional[Learner]:
    result = await db.execute(select(Learner).where(Learner.admission_no == admission_no))
    return result.scalar_one_or_none()


async def ensure_learner_exists(db: AsyncSession, admission_no: str) -> None:
    """Reject references to admission numbers that no current learner holds."""
    if await get_learner_by_admission_no(db, admission_no) is None:
        raise ServiceError(
            f"No learner with admission number '{admission_no}'",
            status.HTTP_400_BAD_REQUEST,
        )


async def count_learners(db: AsyncSession) -> int:
    try:
        result = await db.execute(select(func.count(Learner.id)))
        return result.scalar_one()
    except STORE_ERRORS as e:
        logger.exception("Error counting learners")
        raise store_error(e, "Failed to count learners")


async def list_learners(db: AsyncSession) -> List[LearnerResponse]:
    try:
        result = await db.execute(select(Learner).order_by(Learner.admission_no))
        learners = [_to_response(learner) for learner in result.scalars().all()]
    except STORE_ERRORS as e:
        logger.exception("Error fetching learners")
        raise store_error(e, "Failed to fetch learners")
    logger.info("Fetched %d learners", len(learners))
    return learners


async def create_learner(db: AsyncSession, payload: LearnerCreate) -> LearnerResponse:
    try:
        admission_no = (payload.admission_no or "").strip() or await next_admission_no(db)
        if await _admission_no_taken(db, admission_no):
            raise ServiceError(
                f"Learner with admission number '{admission_no}' already exists",
                status.HTTP_409_CONFLICT,
            )
        learner = Learner(
            admission_no=admission_no,
            full_name=payload.full_name.strip(),
            gender=payload.gender.strip(),
            dob=payload.dob.strip(),
            grade=payload.grade.value,
            assessment_number=(payload.assessment_number or "").strip() or None,
            parent_name=payload.parent_name.strip(),
            parent_phone=payload.parent_phone.strip(),
            parent_email=payload.parent_email.strip(),
        )
        db.add(learner)
        await db.commit()
        await db.refresh(learner)
    except IntegrityError:
        await db.rollback()
        raise ServiceError(
            f"Learner with admission number '{admission_no}' already exists",
            status.HTTP_409_CONFLICT,
        )
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error adding learner")
        raise store_error(e, "Failed to add learner")
    logger.info("Learner %s added (%s)", learner.admission_no, learner.grade)
    return _to_response(learner)


def _clean(field: str, value):
    """Normalise one update value; strings are stripped and a blank assessment number is cleared."""
    if field == "grade" and value is not None:
        return value.value
    if isinstance(value, str):
        value = value.strip()
        if field == "assessment_number" and not value:
            return None
    return value


async def update_learner(db: AsyncSession, learner_id: UUID, payload: LearnerUpdate) -> Optional[LearnerResponse]:
    changes = {field: _clean(field, value) for field, value in payload.model_dump(exclude_unset=True).items()}
    try:
        learner = await db.get(Learner, learner_id)
        if not learner:
            logger.info("Learner with ID %s not found", learner_id)
            return None
        if changes.get("admission_no") and changes["admission_no"] != learner.admission_no:
            if await _admission_no_taken(db, changes["admission_no"], exclude_id=learner_id):
                raise ServiceError(
                    f"Learner with admission number '{changes['admission_no']}' already exists",
                    status.HTTP_409_CONFLICT,
                )
        for field, value in changes.items():
            # assessment_number is the only optional column; other fields skip null and blank
            if field != "assessment_number" and (value is None or value == ""):
                continue
            setattr(learner, field, value)
        await db.commit()
        await db.refresh(learner)
    except IntegrityError:
        await db.rollback()
        raise ServiceError("Learner update conflict", status.HTTP_409_CONFLICT)
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error updating learner %s", learner_id)
        raise store_error(e, "Failed to update learner")
    logger.info("Learner %s updated", learner.admission_no)
    return _to_response(learner)


async def delete_learner(db: AsyncSession, learner_id: UUID) -> bool:
    try:
        learner = await db.get(Learner, learner_id)
        if not learner:
            logger.info("Learner with ID %s not found", learner_id)
            return False
        await db.delete(learner)
        await db.commit()
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error deleting learner %s", learner_id)
        raise store_error(e, "Failed to delete learner")
    logger.info("Learner %s deleted", learner.admission_no)
    return True
