"""Domain model for in-app notifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class NotificationRecord:
    id: str
    title: str
    message: str
    type: str
    read: bool
    link: Optional[str]
    date: Optional[datetime]
