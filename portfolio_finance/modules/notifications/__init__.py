"""Notification exports"""

from .models import NotificationRecord
from .service import NotificationService

__all__ = ["NotificationRecord", "NotificationService"]
