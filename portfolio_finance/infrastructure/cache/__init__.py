"""Cache adapters for finance list views."""

from . import keys
from .backend import CacheBackend, NullCacheBackend, RedisCacheBackend
from .finance_cache import FinanceCache, discard_pending, invalidate_committed

__all__ = [
    "keys",
    "CacheBackend",
    "NullCacheBackend",
    "RedisCacheBackend",
    "FinanceCache",
    "discard_pending",
    "invalidate_committed",
]
