import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, String, Uuid

from school_admin.db.session import Base

SINGLETON_KEY = "default"


class FeeStructure(Base):
    """
    School-wide fee per grade. Single row, keyed by singleton_key.
    Absence of the row means no fees have been configured yet.
    """

    __tablename__ = "fee_structure"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    singleton_key = Column(String(20), unique=True, nullable=False, default=SINGLETON_KEY)
    playgroup = Column(Float, nullable=True)
    pp1 = Column(Float, nullable=True)
    pp2 = Column(Float, nullable=True)
    grade1 = Column(Float, nullable=True)
    grade2 = Column(Float, nullable=True)
    grade3 = Column(Float, nullable=True)
    grade4 = Column(Float, nullable=True)
    grade5 = Column(Float, nullable=True)
    grade6 = Column(Float, nullable=True)
    grade7 = Column(Float, nullable=True)
    grade8 = Column(Float, nullable=True)
    grade9 = Column(Float, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
