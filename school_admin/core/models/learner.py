import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Uuid

from school_admin.db.session import Base


class Learner(Base):
    """
    A learner currently enrolled in the school.

    - admission_no: human-readable identifier (e.g. MPA-014). Fees and books refer to
      learners by this value, not by id.
    - grade: one of core.enums.Grade. Advanced (or the row deleted) by the academic-year rollover.
    """

    __tablename__ = "learners"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    admission_no = Column(String(50), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    gender = Column(String(20), nullable=False)
    dob = Column(String(20), nullable=False)  # as entered, e.g. "2016-04-09"
    grade = Column(String(20), nullable=False)
    assessment_number = Column(String(50), nullable=True)
    parent_name = Column(String(255), nullable=False)
    parent_phone = Column(String(50), nullable=False)
    parent_email = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
