"""Fee schemas."""

from typing import Optional
from uuid import UUID

from pydantic import Field

from school_admin.core.enums import Term
from school_admin.core.schemas import ApiModel


class FeeCreate(ApiModel):
    admission_no: str = Field(..., min_length=1, max_length=50)
    term: Term
    amount_paid: float = Field(..., ge=0)
    balance: float = Field(..., ge=0)


class FeeUpdate(ApiModel):
    admission_no: Optional[str] = Field(None, min_length=1, max_length=50)
    term: Optional[Term] = None
    amount_paid: Optional[float] = Field(None, ge=0)
    balance: Optional[float] = Field(None, ge=0)


class FeeResponse(ApiModel):
    id: UUID
    admission_no: str
    term: str
    amount_paid: float
    balance: float
