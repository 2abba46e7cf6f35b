"""Durable client-side queue of writes made while offline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, Column, DateTime, Integer, String, delete, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class QueueBase(DeclarativeBase):
    pass


class PendingChange(QueueBase):
    __tablename__ = "sync_queue"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(String(255), nullable=False)
    method = Column(String(10), nullable=False, default="POST")
    body = Column(JSON, nullable=False, default=dict)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    entity = Column(String(20))
    action = Column(String(10))
    target_id = Column(String(36))


@dataclass(slots=True)
class QueuedChange:
    url: str
    method: str = "POST"
    body: dict[str, Any] = field(default_factory=dict)
    entity: Optional[str] = None
    action: Optional[str] = None
    target_id: Optional[str] = None
    id: Optional[int] = None
    timestamp: Optional[datetime] = None

    def to_payload(self) -> dict[str, Any]:
        """The shape the server's sync endpoint expects for one change."""
        payload: dict[str, Any] = {"id": self.id, "url": self.url, "method": self.method, "body": self.body}
        if self.timestamp is not None:
            payload["timestamp"] = self.timestamp.isoformat()
        for name in ("entity", "action", "target_id"):
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        return payload


class OfflineQueue:
    """Ordered queue persisted in a local SQLite file.

    Items survive process restarts and come back in insertion order.
    """

    def __init__(self, url: str = "sqlite+aiosqlite:///./offline_queue.db") -> None:
        self._url = url
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None

    async def open(self) -> None:
        if self._engine is not None:
            return
        self._engine = create_async_engine(self._url, future=True)
        self._sessions = async_sessionmaker(bind=self._engine, expire_on_commit=False)
        async with self._engine.begin() as conn:
            await conn.run_sync(QueueBase.metadata.create_all)

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._sessions = None

    async def enqueue(self, change: QueuedChange) -> int:
        async with self._session() as session:
            row = PendingChange(
                url=change.url,
                method=change.method.upper(),
                body=dict(change.body),
                timestamp=change.timestamp or datetime.now(timezone.utc),
                entity=change.entity,
                action=change.action,
                target_id=change.target_id,
            )
            session.add(row)
            await session.commit()
            logger.info("Queued offline change %s %s as #%s", row.method, row.url, row.id)
            return row.id

    async def list_all(self) -> list[QueuedChange]:
        async with self._session() as session:
            result = await session.execute(select(PendingChange).order_by(PendingChange.id))
            return [self._to_change(row) for row in result.scalars()]

    async def remove_by_id(self, *ids: int) -> None:
        if not ids:
            return
        async with self._session() as session:
            await session.execute(delete(PendingChange).where(PendingChange.id.in_(ids)))
            await session.commit()

    async def clear_all(self) -> None:
        async with self._session() as session:
            await session.execute(delete(PendingChange))
            await session.commit()

    async def count(self) -> int:
        return len(await self.list_all())

    def _session(self) -> AsyncSession:
        if self._sessions is None:
            raise RuntimeError("OfflineQueue.open() must be awaited first")
        return self._sessions()

    @staticmethod
    def _to_change(row: PendingChange) -> QueuedChange:
        return QueuedChange(
            id=row.id,
            url=row.url,
            method=row.method,
            body=dict(row.body or {}),
            entity=row.entity,
            action=row.action,
            target_id=row.target_id,
            timestamp=row.timestamp,
        )
