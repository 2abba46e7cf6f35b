"""Income routes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.infrastructure.cache import FinanceCache, keys
from portfolio_finance.infrastructure.health import StoreHealth
from portfolio_finance.interfaces.http.deps import get_cache, get_db_session, get_income_service, get_store_health
from portfolio_finance.interfaces.http.responses import read_payload, run_mutation
from portfolio_finance.modules.income import IncomeService
from portfolio_finance.schemas import IncomeResponse

router = APIRouter()

LIST_URL = "/admin/finance/income"


def _dump(income) -> dict:
    return IncomeResponse.model_validate(income).model_dump(mode="json")


@router.get("/income")
async def list_income(
    service: IncomeService = Depends(get_income_service),
    cache: FinanceCache = Depends(get_cache),
    health: StoreHealth = Depends(get_store_health),
):
    async def load():
        return [_dump(income) for income in await service.list_income()]

    return await cache.read_through(keys.INCOME, load, guard=health.ensure_available)


@router.get("/income/{income_id}", response_model=IncomeResponse)
async def get_income(income_id: str, service: IncomeService = Depends(get_income_service)):
    return IncomeResponse.model_validate(await service.get_income(income_id))


@router.post("/income/add")
async def add_income(
    request: Request,
    service: IncomeService = Depends(get_income_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.create(data),
        redirect_to=LIST_URL,
        message="Income added",
        serialize=_dump,
    )


@router.post("/income/edit/{income_id}")
async def edit_income(
    income_id: str,
    request: Request,
    service: IncomeService = Depends(get_income_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.update(income_id, data),
        redirect_to=LIST_URL,
        message="Income updated",
        serialize=_dump,
    )


@router.post("/income/delete/{income_id}")
async def delete_income(
    income_id: str,
    request: Request,
    service: IncomeService = Depends(get_income_service),
    db: AsyncSession = Depends(get_db_session),
):
    return await run_mutation(
        request,
        db,
        lambda: service.delete(income_id),
        redirect_to=LIST_URL,
        message="Income deleted",
        serialize=_dump,
    )

