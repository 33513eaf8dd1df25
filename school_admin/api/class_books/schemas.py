"""Class book inventory schemas."""

from typing import Optional
from uuid import UUID

from pydantic import Field

from school_admin.core.schemas import ApiModel


class ClassBookCreate(ApiModel):
    book_number: str = Field(..., min_length=1, max_length=50)
    subject: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    total_books: int = Field(..., ge=0)


class ClassBookUpdate(ApiModel):
    book_number: Optional[str] = Field(None, min_length=1, max_length=50)
    subject: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1)
    total_books: Optional[int] = Field(None, ge=0)


class ClassBookResponse(ApiModel):
    id: UUID
    book_number: str
    subject: str
    description: str
    total_books: int
