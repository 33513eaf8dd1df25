import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Uuid

from school_admin.core.models.fee_structure import SINGLETON_KEY
from school_admin.db.session import Base


class TermSettings(Base):
    """Current term and year. Single row; the academic-year rollover requires it to exist."""

    __tablename__ = "term_settings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    singleton_key = Column(String(20), unique=True, nullable=False, default=SINGLETON_KEY)
    current_term = Column(String(20), nullable=False)  # Term 1 | Term 2 | Term 3
    current_year = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
