"""Offline-first client for the finance API.

Writes go straight to the server while online. While offline, or when the
server cannot be reached, they are queued locally and replayed as one ordered
batch on the next transition back online.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import httpx

from .offline_queue import OfflineQueue, QueuedChange

logger = logging.getLogger(__name__)

SYNC_PATH = "/admin/finance/sync"


class SyncState(str, enum.Enum):
    ONLINE_IDLE = "online_idle"
    OFFLINE_QUEUING = "offline_queuing"
    REPLAYING = "replaying"


class ReplayOutcome(str, enum.Enum):
    EMPTY = "empty"
    ALL_OK = "all_ok"
    PARTIAL_FAIL = "partial_fail"
    FAILED = "failed"


@dataclass(slots=True)
class SubmitResult:
    queued: bool
    queue_id: Optional[int] = None
    status_code: Optional[int] = None
    data: Any = None


@dataclass(slots=True)
class ReplayReport:
    outcome: ReplayOutcome
    sent: int = 0
    removed: list[int] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    unreachable: bool = False


class SyncClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        queue: OfflineQueue,
        *,
        sync_path: str = SYNC_PATH,
    ) -> None:
        self.http = http
        self.queue = queue
        self.sync_path = sync_path
        self.state = SyncState.ONLINE_IDLE

    @classmethod
    def connect(
        cls,
        base_url: str,
        token: str,
        queue: OfflineQueue,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "SyncClient":
        http = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )
        return cls(http, queue)

    @property
    def online(self) -> bool:
        return self.state is not SyncState.OFFLINE_QUEUING

    async def submit(
        self,
        url: str,
        body: Mapping[str, Any],
        *,
        method: str = "POST",
        entity: str | None = None,
        action: str | None = None,
        target_id: str | None = None,
    ) -> SubmitResult:
        change = QueuedChange(
            url=url, method=method, body=dict(body), entity=entity, action=action, target_id=target_id
        )
        if self.state is not SyncState.ONLINE_IDLE:
            return await self._enqueue(change)

        try:
            response = await self.http.request(method, url, json=change.body, headers={"Accept": "application/json"})
        except httpx.TransportError as exc:
            logger.warning("Server unreachable (%s); switching to offline mode", exc)
            self.go_offline()
            return await self._enqueue(change)

        data = _json_or_none(response)
        if response.status_code == httpx.codes.SERVICE_UNAVAILABLE and isinstance(data, dict) and data.get("offline"):
            logger.warning("Server storage is offline; queueing %s", url)
            return await self._enqueue(change)
        return SubmitResult(queued=False, status_code=response.status_code, data=data)

    def go_offline(self) -> None:
        if self.state is not SyncState.OFFLINE_QUEUING:
            logger.info("Client is offline; writes will be queued")
        self.state = SyncState.OFFLINE_QUEUING

    async def go_online(self) -> ReplayReport:
        self.state = SyncState.REPLAYING
        report = await self.replay()
        if report.unreachable:
            self.state = SyncState.OFFLINE_QUEUING
        else:
            self.state = SyncState.ONLINE_IDLE
        return report

    async def replay(self) -> ReplayReport:
        """Send every queued change as one batch; remove only what the server confirmed."""
        items = await self.queue.list_all()
        if not items:
            return ReplayReport(ReplayOutcome.EMPTY)

        payload = {"changes": [item.to_payload() for item in items]}
        try:
            response = await self.http.post(self.sync_path, json=payload)
        except httpx.TransportError as exc:
            logger.warning("Sync of %d changes failed: %s", len(items), exc)
            return ReplayReport(ReplayOutcome.FAILED, sent=len(items), errors=[str(exc)], unreachable=True)

        data = _json_or_none(response)
        if response.is_error or not isinstance(data, dict) or not data.get("success"):
            logger.warning("Sync rejected with HTTP %s", response.status_code)
            return ReplayReport(ReplayOutcome.FAILED, sent=len(items), errors=[f"HTTP {response.status_code}"])

        results = data.get("results") or []
        confirmed: list[int] = []
        errors: list[str] = []
        for position, item in enumerate(items):
            result = results[position] if position < len(results) else None
            if isinstance(result, dict) and result.get("success"):
                confirmed.append(item.id)
            else:
                errors.append(str(result.get("error")) if isinstance(result, dict) else "missing result")

        await self.queue.remove_by_id(*confirmed)
        if errors:
            logger.warning("Sync kept %d of %d changes after failures: %s", len(errors), len(items), errors)
            return ReplayReport(ReplayOutcome.PARTIAL_FAIL, sent=len(items), removed=confirmed, errors=errors)
        logger.info("Synced %d offline changes", len(items))
        return ReplayReport(ReplayOutcome.ALL_OK, sent=len(items), removed=confirmed)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def _enqueue(self, change: QueuedChange) -> SubmitResult:
        queue_id = await self.queue.enqueue(change)
        return SubmitResult(queued=True, queue_id=queue_id)


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
