from school_admin.core.schemas import ApiModel


class NewAcademicYearResponse(ApiModel):
    """Outcome of a rollover. archivedYear is the year that was closed."""

    archived_year: int
    current_year: int
    current_term: str
    archived_learners: int
    promoted_learners: int
    graduated_learners: int
    unchanged_learners: int = 0
