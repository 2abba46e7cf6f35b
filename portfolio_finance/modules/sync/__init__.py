"""Offline sync replay exports"""

from .classifier import classify, parse_url
from .models import ChangeTarget, SyncChange, SyncResult
from .service import SyncReplayService

__all__ = ["ChangeTarget", "SyncChange", "SyncResult", "SyncReplayService", "classify", "parse_url"]
