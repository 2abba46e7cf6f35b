"""In-app notification service. Delivery is best effort."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Notification as NotificationModel
from portfolio_finance.infrastructure.database.repositories.notification_repository import (
    SqlNotificationRepository,
)
from portfolio_finance.modules.common.exceptions import NotFoundError

from .models import NotificationRecord
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NotificationService:
    repository: NotificationRepository
    session: AsyncSession
    enabled: bool = True

    @classmethod
    def with_session(cls, session: AsyncSession, enabled: bool = True) -> "NotificationService":
        return cls(SqlNotificationRepository(session), session, enabled)

    async def notify(
        self,
        title: str,
        message: str,
        *,
        type: str = "info",
        link: str | None = None,
    ) -> NotificationRecord | None:
        """Record a notification without ever failing the caller's mutation.

        The insert runs inside a SAVEPOINT so a failure rolls back only the
        notification row.
        """
        if not self.enabled:
            return None
        try:
            async with self.session.begin_nested():
                model = await self.repository.create(title=title, message=message, type=type, link=link)
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Notification %r dropped: %s", title, exc)
            return None
        return self._to_domain(model)

    async def list_recent(self, limit: int = 20) -> list[NotificationRecord]:
        rows = await self.repository.list_recent(limit)
        return [self._to_domain(row) for row in rows]

    async def mark_read(self, notification_id: str) -> NotificationRecord:
        model = await self.repository.mark_read(notification_id)
        if model is None:
            raise NotFoundError("Notification", notification_id)
        return self._to_domain(model)

    async def count_unread(self) -> int:
        return await self.repository.count_unread()

    @staticmethod
    def _to_domain(model: NotificationModel) -> NotificationRecord:
        return NotificationRecord(
            id=model.id,
            title=model.title,
            message=model.message,
            type=model.type,
            read=bool(model.read),
            link=model.link,
            date=model.date,
        )
