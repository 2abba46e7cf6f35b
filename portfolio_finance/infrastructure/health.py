"""Backing-store health probe injected into read paths."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from portfolio_finance.modules.common.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


class StoreHealth:
    """Answers whether the database can currently serve queries."""

    def __init__(self, engine: AsyncEngine, timeout: float = 5.0) -> None:
        self._engine = engine
        self._timeout = timeout

    async def is_available(self) -> bool:
        try:
            async with asyncio.timeout(self._timeout):
                async with self._engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError, TimeoutError) as exc:
            logger.warning("Database unreachable: %s", exc)
            return False
        return True

    async def ensure_available(self) -> None:
        if not await self.is_available():
            raise StorageUnavailableError("database is unavailable")
