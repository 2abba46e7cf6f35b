"""Repository protocol for notifications."""

from __future__ import annotations

from typing import Protocol, Sequence

from portfolio_finance.db.models import Notification as NotificationModel


class NotificationRepository(Protocol):
    async def create(self, *, title: str, message: str, type: str, link: str | None) -> NotificationModel:
        ...

    async def list_recent(self, limit: int) -> Sequence[NotificationModel]:
        ...

    async def mark_read(self, notification_id: str) -> NotificationModel | None:
        ...

    async def count_unread(self) -> int:
        ...
