from fastapi import APIRouter, Depends

from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.infrastructure.health import StoreHealth
from portfolio_finance.interfaces.http.deps import get_cache, get_store_health
from portfolio_finance.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    health: StoreHealth = Depends(get_store_health),
    cache: FinanceCache = Depends(get_cache),
):
    database = await health.is_available()
    cache_ok = await cache.is_available()
    return HealthResponse(status="ok" if database else "offline", database=database, cache=cache_ok)
