"""Term settings schemas."""

from typing import Optional
from uuid import UUID

from pydantic import Field

from school_admin.core.enums import Term
from school_admin.core.schemas import ApiModel


class TermSettingsBody(ApiModel):
    """Both fields are required the first time settings are saved; later saves may send either."""

    current_term: Optional[Term] = None
    current_year: Optional[int] = Field(None, gt=0)


class TermSettingsResponse(ApiModel):
    id: Optional[UUID] = None
    current_term: str
    current_year: int
