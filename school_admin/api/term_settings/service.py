"""Term settings singleton: current term and year."""

import logging
from datetime import date
from typing import Optional

from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import STORE_ERRORS, ServiceError, store_error
from school_admin.core.grades import FIRST_TERM
from school_admin.core.models import TermSettings
from school_admin.core.models.term_settings import SINGLETON_KEY

from .schemas import TermSettingsBody, TermSettingsResponse

logger = logging.getLogger(__name__)


def default_term_settings() -> TermSettingsResponse:
    """First term of the current calendar year. Used whenever nothing is stored."""
    return TermSettingsResponse(current_term=FIRST_TERM, current_year=date.today().year)


def _to_response(ts: TermSettings) -> TermSettingsResponse:
    return TermSettingsResponse(id=ts.id, current_term=ts.current_term, current_year=ts.current_year)


async def get_term_settings_row(db: AsyncSession) -> Optional[TermSettings]:
    result = await db.execute(select(TermSettings).where(TermSettings.singleton_key == SINGLETON_KEY))
    return result.scalar_one_or_none()


async def get_term_settings(db: AsyncSession) -> TermSettingsResponse:
    try:
        ts = await get_term_settings_row(db)
    except STORE_ERRORS as e:
        logger.exception("Error fetching term settings")
        raise store_error(e, "Failed to fetch term settings")
    if not ts:
        logger.info("No term settings saved yet; using defaults")
        return default_term_settings()
    return _to_response(ts)


async def save_term_settings(db: AsyncSession, payload: TermSettingsBody) -> TermSettingsResponse:
    try:
        ts = await get_term_settings_row(db)
        if ts:
            logger.info("Updating term settings: term=%s year=%s", payload.current_term, payload.current_year)
            if payload.current_term is not None:
                ts.current_term = payload.current_term.value
            if payload.current_year is not None:
                ts.current_year = payload.current_year
        else:
            if payload.current_term is None or payload.current_year is None:
                raise ServiceError(
                    "currentTerm and currentYear are required when creating term settings",
                    status.HTTP_400_BAD_REQUEST,
                )
            logger.info("Creating term settings: term=%s year=%s", payload.current_term.value, payload.current_year)
            ts = TermSettings(
                singleton_key=SINGLETON_KEY,
                current_term=payload.current_term.value,
                current_year=payload.current_year,
            )
            db.add(ts)
        await db.commit()
        await db.refresh(ts)
    except STORE_ERRORS as e:
        await db.rollback()
        logger.exception("Error saving term settings")
        raise store_error(e, "Failed to save term settings")
    return _to_response(ts)
