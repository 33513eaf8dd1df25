"""Book schemas."""

from typing import Optional
from uuid import UUID

from pydantic import Field

from school_admin.core.schemas import ApiModel


class BookCreate(ApiModel):
    admission_no: str = Field(..., min_length=1, max_length=50)
    subject: str = Field(..., min_length=1, max_length=100)
    book_title: str = Field(..., min_length=1, max_length=255)


class BookUpdate(ApiModel):
    admission_no: Optional[str] = Field(None, min_length=1, max_length=50)
    subject: Optional[str] = Field(None, min_length=1, max_length=100)
    book_title: Optional[str] = Field(None, min_length=1, max_length=255)


class BookResponse(ApiModel):
    id: UUID
    admission_no: str
    subject: str
    book_title: str
