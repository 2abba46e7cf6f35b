"""Cache and store-health providers."""

from portfolio_finance.core.container import get_container
from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.infrastructure.health import StoreHealth


def get_cache() -> FinanceCache:
    return get_container().cache


def get_store_health() -> StoreHealth:
    return get_container().store_health


__all__ = ["get_cache", "get_store_health"]
