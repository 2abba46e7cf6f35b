"""Offline-first client: a durable local queue plus batch replay."""

from .offline_queue import OfflineQueue, QueuedChange
from .sync_client import ReplayOutcome, ReplayReport, SubmitResult, SyncClient, SyncState

__all__ = [
    "OfflineQueue",
    "QueuedChange",
    "ReplayOutcome",
    "ReplayReport",
    "SubmitResult",
    "SyncClient",
    "SyncState",
]
