import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Integer, Uuid
from sqlalchemy.dialects.postgresql import JSONB

from school_admin.db.session import Base


class LearnerArchive(Base):
    """
    Snapshot of the learner roster taken when an academic year is closed.
    One row per year; never updated after creation.
    """

    __tablename__ = "learner_archives"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    year = Column(Integer, unique=True, nullable=False, index=True)
    # List of learner dicts in API (camelCase) form
    learners = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
