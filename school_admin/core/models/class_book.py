import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text, Uuid

from school_admin.db.session import Base


class ClassBook(Base):
    """Class book inventory line. Not tied to a learner."""

    __tablename__ = "class_books"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    book_number = Column(String(50), nullable=False, index=True)
    subject = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    total_books = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
