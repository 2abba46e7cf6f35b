"""In-app notification routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.interfaces.http.deps import get_db_session, get_notification_service
from portfolio_finance.modules.notifications import NotificationService
from portfolio_finance.schemas import NotificationListResponse, NotificationResponse

router = APIRouter()


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    limit: int = Query(20, ge=1, le=100),
    service: NotificationService = Depends(get_notification_service),
):
    return NotificationListResponse(
        unread=await service.count_unread(),
        notifications=[NotificationResponse.model_validate(row) for row in await service.list_recent(limit)],
    )


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
    db: AsyncSession = Depends(get_db_session),
):
    notification = await service.mark_read(notification_id)
    await db.commit()
    return NotificationResponse.model_validate(notification)
