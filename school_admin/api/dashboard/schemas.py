from typing import List

from school_admin.core.schemas import ApiModel


class DashboardResponse(ApiModel):
    """Headline numbers for the admin dashboard."""

    learner_count: int = 0
    total_fees_paid: float = 0
    book_count: int = 0
    class_book_count: int = 0
    current_term: str
    current_year: int
    archived_years: List[int] = []
