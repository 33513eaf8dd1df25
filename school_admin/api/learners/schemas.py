"""Learner schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from school_admin.core.enums import Grade
from school_admin.core.schemas import ApiModel


class LearnerCreate(ApiModel):
    """Create learner. admissionNo is generated (e.g. MPA-007) when omitted."""

    admission_no: Optional[str] = Field(None, max_length=50)
    full_name: str = Field(..., min_length=1, max_length=255)
    gender: str = Field(..., min_length=1, max_length=20)
    dob: str = Field(..., min_length=1, max_length=20, description="Date of birth as entered, e.g. 2016-04-09")
    grade: Grade
    assessment_number: Optional[str] = Field(None, max_length=50)
    parent_name: str = Field(..., min_length=1, max_length=255)
    parent_phone: str = Field(..., min_length=1, max_length=50)
    parent_email: str = Field(..., min_length=1, max_length=255)


class LearnerUpdate(ApiModel):
    admission_no: Optional[str] = Field(None, min_length=1, max_length=50)
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    gender: Optional[str] = Field(None, min_length=1, max_length=20)
    dob: Optional[str] = Field(None, min_length=1, max_length=20)
    grade: Optional[Grade] = None
    assessment_number: Optional[str] = Field(None, max_length=50)
    parent_name: Optional[str] = Field(None, min_length=1, max_length=255)
    parent_phone: Optional[str] = Field(None, min_length=1, max_length=50)
    parent_email: Optional[str] = Field(None, min_length=1, max_length=255)


class LearnerResponse(ApiModel):
    id: UUID
    admission_no: str
    full_name: str
    gender: str
    dob: str
    grade: str
    assessment_number: Optional[str] = None
    parent_name: str
    parent_phone: str
    parent_email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
