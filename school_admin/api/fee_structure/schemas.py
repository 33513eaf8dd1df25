"""Fee structure schemas. One optional amount per grade."""

from typing import Optional
from uuid import UUID

from pydantic import Field

from school_admin.core.schemas import ApiModel


class FeeStructureBody(ApiModel):
    playgroup: Optional[float] = Field(None, ge=0)
    pp1: Optional[float] = Field(None, ge=0)
    pp2: Optional[float] = Field(None, ge=0)
    grade1: Optional[float] = Field(None, ge=0)
    grade2: Optional[float] = Field(None, ge=0)
    grade3: Optional[float] = Field(None, ge=0)
    grade4: Optional[float] = Field(None, ge=0)
    grade5: Optional[float] = Field(None, ge=0)
    grade6: Optional[float] = Field(None, ge=0)
    grade7: Optional[float] = Field(None, ge=0)
    grade8: Optional[float] = Field(None, ge=0)
    grade9: Optional[float] = Field(None, ge=0)


class FeeStructureResponse(FeeStructureBody):
    id: Optional[UUID] = None
