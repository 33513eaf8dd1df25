from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.api.books.service import count_books
from school_admin.api.class_books.service import count_class_books
from school_admin.api.fees.service import total_fees_paid
from school_admin.api.learner_archives.service import list_archived_years
from school_admin.api.learners.service import count_learners
from school_admin.api.term_settings.service import default_term_settings, get_term_settings

from .schemas import DashboardResponse


async def get_dashboard(db: AsyncSession) -> DashboardResponse:
    term = await get_term_settings(db)
    return DashboardResponse(
        learner_count=await count_learners(db),
        total_fees_paid=await total_fees_paid(db),
        book_count=await count_books(db),
        class_book_count=await count_class_books(db),
        current_term=term.current_term,
        current_year=term.current_year,
        archived_years=await list_archived_years(db),
    )


def empty_dashboard() -> DashboardResponse:
    term = default_term_settings()
    return DashboardResponse(current_term=term.current_term, current_year=term.current_year)
