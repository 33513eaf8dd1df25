import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Uuid

from school_admin.db.session import Base


class Book(Base):
    """Book issued to a specific learner."""

    __tablename__ = "books"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    admission_no = Column(String(50), nullable=False, index=True)
    subject = Column(String(100), nullable=False)
    book_title = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
