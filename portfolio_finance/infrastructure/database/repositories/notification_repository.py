"""SQLAlchemy implementation for notifications"""

from __future__ import annotations

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Notification


class SqlNotificationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, *, title: str, message: str, type: str, link: str | None) -> Notification:
        notification = Notification(title=title, message=message, type=type, link=link, read=False)
        self.session.add(notification)
        await self.session.flush()
        return notification

    async def list_recent(self, limit: int) -> list[Notification]:
        stmt = select(Notification).order_by(desc(Notification.date)).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def mark_read(self, notification_id: str) -> Notification | None:
        notification = await self.session.get(Notification, notification_id)
        if notification is None:
            return None
        notification.read = True
        await self.session.flush()
        return notification

    async def count_unread(self) -> int:
        stmt = select(func.count(Notification.id)).where(Notification.read.is_(False))
        return int((await self.session.execute(stmt)).scalar_one())
