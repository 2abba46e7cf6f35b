"""Best-effort JSON cache for finance list views."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable

from portfolio_finance.modules.common.exceptions import CacheError

from .backend import CacheBackend
from .keys import ALL_FINANCE_KEYS, INVALIDATES

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600

# session.info slot holding keys invalidated inside the open transaction
PENDING_INFO_KEY = "finance_cache.pending"


class FinanceCache:
    """Wraps a backend so that cache failures never reach the caller.

    A failed read is a miss, a failed write or delete is logged and ignored.

    A cache bound to a session with :meth:`for_session` also remembers what it
    invalidated, so the keys can be dropped again once that transaction
    commits (see :func:`invalidate_committed`). Otherwise a read landing
    between the delete and the commit would re-cache pre-commit rows.
    """

    def __init__(
        self,
        backend: CacheBackend,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        session: "AsyncSession | None" = None,
    ) -> None:
        self.backend = backend
        self.ttl_seconds = ttl_seconds
        self.session = session

    def for_session(self, session: "AsyncSession") -> "FinanceCache":
        return FinanceCache(self.backend, self.ttl_seconds, session=session)

    async def get_json(self, key: str) -> Any | None:
        try:
            raw = await self.backend.get(key)
        except CacheError as exc:
            logger.warning("Cache read failed for %s: %s", key, exc)
            return None
        if raw is None:
            logger.debug("Cache miss: %s", key)
            return None
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable cache entry %s", key)
            await self.invalidate(key)
            return None
        logger.debug("Cache hit: %s", key)
        return value

    async def set_json(self, key: str, value: Any) -> None:
        try:
            await self.backend.set(key, json.dumps(value), self.ttl_seconds)
        except CacheError as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)

    async def invalidate(self, *keys: str) -> None:
        if not keys:
            return
        await self._delete(keys)
        if self.session is not None:
            pending = self.session.info.setdefault(PENDING_INFO_KEY, {})
            _, remembered = pending.setdefault(id(self.backend), (self, set()))
            remembered.update(keys)

    async def _delete(self, keys: Iterable[str]) -> None:
        keys = tuple(keys)
        try:
            await self.backend.delete(*keys)
        except CacheError as exc:
            logger.warning("Cache invalidation failed for %s: %s", ", ".join(keys), exc)

    async def invalidate_for(self, entity_types: Iterable[str]) -> None:
        keys: list[str] = []
        for entity_type in entity_types:
            for key in INVALIDATES.get(entity_type, ()):
                if key not in keys:
                    keys.append(key)
        await self.invalidate(*keys)

    async def invalidate_all(self) -> None:
        await self.invalidate(*ALL_FINANCE_KEYS)

    async def read_through(
        self,
        key: str,
        loader: Callable[[], Awaitable[Any]],
        *,
        guard: Callable[[], Awaitable[None]] | None = None,
    ) -> Any:
        """Serve ``key`` from cache, else run ``guard`` then ``loader`` and cache the result."""
        cached = await self.get_json(key)
        if cached is not None:
            return cached
        if guard is not None:
            await guard()
        value = await loader()
        await self.set_json(key, value)
        return value

    async def is_available(self) -> bool:
        return await self.backend.ping()

    async def close(self) -> None:
        await self.backend.close()


async def invalidate_committed(session: "AsyncSession") -> None:
    """Drop again every key invalidated inside the transaction that just committed."""
    pending = session.info.pop(PENDING_INFO_KEY, None)
    if not pending:
        return
    for cache, keys in pending.values():
        await cache._delete(sorted(keys))
        logger.debug("Post-commit invalidation: %s", ", ".join(sorted(keys)))


def discard_pending(session: "AsyncSession") -> None:
    """Forget invalidations of a transaction that was rolled back."""
    session.info.pop(PENDING_INFO_KEY, None)
