"""Create any missing record store tables. Existing tables are left untouched."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

import school_admin.core.models  # noqa: F401  registers every model on Base.metadata
from school_admin.db.session import Base

logger = logging.getLogger(__name__)


async def ensure_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Record store schema verified (%d tables)", len(Base.metadata.tables))
