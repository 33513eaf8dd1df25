import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, String, Uuid

from school_admin.db.session import Base


class Fee(Base):
    """Fee payment record for one learner and term."""

    __tablename__ = "fees"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    admission_no = Column(String(50), nullable=False, index=True)
    term = Column(String(20), nullable=False)
    amount_paid = Column(Float, nullable=False)
    balance = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
