"""Category routes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.infrastructure.cache import FinanceCache, keys
from portfolio_finance.infrastructure.health import StoreHealth
from portfolio_finance.interfaces.http.deps import get_cache, get_db_session, get_category_service, get_store_health
from portfolio_finance.interfaces.http.responses import read_payload, run_mutation
from portfolio_finance.modules.categories import CategoryService
from portfolio_finance.schemas import CategoryResponse

router = APIRouter()

LIST_URL = "/admin/finance/categories"


def _dump(category) -> dict:
    return CategoryResponse.model_validate(category).model_dump(mode="json")


@router.get("/categories")
async def list_categories(
    service: CategoryService = Depends(get_category_service),
    cache: FinanceCache = Depends(get_cache),
    health: StoreHealth = Depends(get_store_health),
):
    async def load():
        return [_dump(category) for category in await service.list_categories()]

    return await cache.read_through(keys.CATEGORIES, load, guard=health.ensure_available)


@router.post("/categories/add")
async def add_category(
    request: Request,
    service: CategoryService = Depends(get_category_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.create(data),
        redirect_to=LIST_URL,
        message="Category added",
        serialize=_dump,
    )


@router.post("/categories/edit/{category_id}")
async def edit_category(
    category_id: str,
    request: Request,
    service: CategoryService = Depends(get_category_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.update(category_id, data),
        redirect_to=LIST_URL,
        message="Category updated",
        serialize=_dump,
    )


@router.post("/categories/delete/{category_id}")
async def delete_category(
    category_id: str,
    request: Request,
    service: CategoryService = Depends(get_category_service),
    db: AsyncSession = Depends(get_db_session),
):
    return await run_mutation(
        request,
        db,
        lambda: service.delete(category_id),
        redirect_to=LIST_URL,
        message="Category deleted",
        serialize=_dump,
    )

