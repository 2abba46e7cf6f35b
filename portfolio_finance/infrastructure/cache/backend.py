"""Key-value cache backends."""

from __future__ import annotations

from typing import Protocol

from redis.asyncio import Redis
from redis.exceptions import RedisError

from portfolio_finance.modules.common.exceptions import CacheError


class CacheBackend(Protocol):
    async def get(self, key: str) -> str | None:
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        ...

    async def delete(self, *keys: str) -> None:
        ...

    async def ping(self) -> bool:
        ...

    async def close(self) -> None:
        ...


class RedisCacheBackend:
    """Redis-backed cache; every client failure surfaces as ``CacheError``."""

    def __init__(self, url: str, *, socket_timeout: float = 1.0) -> None:
        self._client = Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except (RedisError, OSError) as exc:
            raise CacheError(f"get {key} failed: {exc}") from exc

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except (RedisError, OSError) as exc:
            raise CacheError(f"set {key} failed: {exc}") from exc

    async def delete(self, *keys: str) -> None:
        if not keys:
            return
        try:
            await self._client.delete(*keys)
        except (RedisError, OSError) as exc:
            raise CacheError(f"delete {', '.join(keys)} failed: {exc}") from exc

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError):
            return False

    async def close(self) -> None:
        await self._client.aclose()


class NullCacheBackend:
    """Backend used when caching is disabled: every read misses."""

    async def get(self, key: str) -> str | None:
        return None

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        return None

    async def delete(self, *keys: str) -> None:
        return None

    async def ping(self) -> bool:
        return False

    async def close(self) -> None:
        return None
