"""New academic year (rollover) router."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.dependencies import require_store, service_http_error
from school_admin.core.exceptions import ServiceError
from school_admin.db.connection import ConnectionManager
from school_admin.db.session import get_db

from .schemas import NewAcademicYearResponse
from . import service

router = APIRouter(prefix="/newAcademicYear", tags=["academic-year"])


@router.post("", response_model=NewAcademicYearResponse)
async def start_new_academic_year(
    db: AsyncSession = Depends(get_db),
    connection: ConnectionManager = Depends(require_store),
) -> NewAcademicYearResponse:
    """Archive this year's learners, promote everyone one grade, graduate Grade 9 and move to Term 1 of next year."""
    try:
        return await service.start_new_academic_year(db)
    except ServiceError as e:
        raise await service_http_error(e, connection)
