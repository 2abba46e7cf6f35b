"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from portfolio_finance.core.config import Settings, get_settings
from portfolio_finance.infrastructure.cache import FinanceCache, NullCacheBackend, RedisCacheBackend
from portfolio_finance.infrastructure.database.session import get_engine
from portfolio_finance.infrastructure.health import StoreHealth


def build_cache(settings: Settings) -> FinanceCache:
    if not settings.cache.enabled:
        return FinanceCache(NullCacheBackend(), settings.cache_ttl)
    backend = RedisCacheBackend(settings.cache.url, socket_timeout=settings.cache.socket_timeout)
    return FinanceCache(backend, settings.cache_ttl)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    cache: FinanceCache
    store_health: StoreHealth

    async def close(self) -> None:
        await self.cache.close()


@lru_cache()
def get_container() -> ApplicationContainer:
    settings = get_settings()
    return ApplicationContainer(
        settings=settings,
        cache=build_cache(settings),
        store_health=StoreHealth(get_engine(), timeout=settings.database.health_timeout),
    )


__all__ = ["ApplicationContainer", "build_cache", "get_container"]
