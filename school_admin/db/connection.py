"""
Record store connection state.

ConnectionManager owns the readiness signal every handler consults:
- start(): bounded connect attempts with fixed backoff; on exhaustion an
  unbounded background loop keeps retrying on a fixed interval.
- is_ready: mutations fail fast with 503 when False, reads degrade to defaults.
"""

import asyncio
import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from school_admin.core.enums import ConnectionState
from school_admin.db.schema_check import ensure_schema

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(
        self,
        engine: AsyncEngine,
        max_retries: int = 5,
        retry_backoff: float = 5.0,
        reconnect_interval: float = 30.0,
    ) -> None:
        self.engine = engine
        self.max_retries = max_retries
        self.retry_backoff = retry_backoff
        self.reconnect_interval = reconnect_interval
        self.state = ConnectionState.INIT
        self._reconnect_task: Optional[asyncio.Task] = None

    @property
    def is_ready(self) -> bool:
        return self.state == ConnectionState.READY

    async def ping(self) -> bool:
        """Run a trivial query against the store. Never raises."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Record store ping failed: %s", e)
            return False

    async def _try_connect(self) -> bool:
        if not await self.ping():
            return False
        try:
            await ensure_schema(self.engine)
        except Exception:
            logger.exception("Record store reachable but schema check failed")
            return False
        return True

    async def connect(self) -> bool:
        """Try to reach the store up to max_retries times. Returns True once READY."""
        url = self.engine.url.render_as_string(hide_password=True)
        for attempt in range(1, self.max_retries + 1):
            logger.info("Attempt %d/%d - connecting to record store %s", attempt, self.max_retries, url)
            if await self._try_connect():
                self.state = ConnectionState.READY
                logger.info("Connected to record store")
                return True
            if attempt < self.max_retries:
                await asyncio.sleep(self.retry_backoff)
        logger.error("Max retries reached. Proceeding without record store connection")
        self.state = ConnectionState.DEGRADED
        return False

    async def _reconnect_loop(self) -> None:
        while True:
            await asyncio.sleep(self.reconnect_interval)
            if self.is_ready:
                continue
            logger.info("Record store is disconnected. Attempting to reconnect...")
            self.state = ConnectionState.RETRYING
            if await self._try_connect():
                self.state = ConnectionState.READY
                logger.info("Reconnected to record store")
            else:
                self.state = ConnectionState.DEGRADED

    def start_reconnect_loop(self) -> None:
        if self._reconnect_task is None or self._reconnect_task.done():
            self._reconnect_task = asyncio.create_task(self._reconnect_loop())

    async def start(self) -> None:
        connected = await self.connect()
        if not connected:
            self.start_reconnect_loop()

    async def mark_unavailable(self) -> None:
        """Called after a store error: drop to DEGRADED if the store no longer answers."""
        if self.is_ready and not await self.ping():
            logger.error("Record store connection lost")
            self.state = ConnectionState.DEGRADED
            self.start_reconnect_loop()

    async def stop(self) -> None:
        if self._reconnect_task is not None:
            self._reconnect_task.cancel()
            try:
                await self._reconnect_task
            except asyncio.CancelledError:
                pass
            self._reconnect_task = None
        await self.engine.dispose()
