"""Expense routes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.infrastructure.cache import FinanceCache, keys
from portfolio_finance.infrastructure.health import StoreHealth
from portfolio_finance.interfaces.http.deps import get_cache, get_db_session, get_expense_service, get_store_health
from portfolio_finance.interfaces.http.responses import read_payload, run_mutation
from portfolio_finance.modules.expenses import ExpenseService
from portfolio_finance.schemas import ExpenseResponse

router = APIRouter()

LIST_URL = "/admin/finance/expenses"


def _dump(expense) -> dict:
    return ExpenseResponse.model_validate(expense).model_dump(mode="json")


@router.get("/expenses")
async def list_expenses(
    service: ExpenseService = Depends(get_expense_service),
    cache: FinanceCache = Depends(get_cache),
    health: StoreHealth = Depends(get_store_health),
):
    async def load():
        return [_dump(expense) for expense in await service.list_expenses()]

    return await cache.read_through(keys.EXPENSES, load, guard=health.ensure_available)


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
async def get_expense(expense_id: str, service: ExpenseService = Depends(get_expense_service)):
    return ExpenseResponse.model_validate(await service.get_expense(expense_id))


@router.post("/expenses/add")
async def add_expense(
    request: Request,
    service: ExpenseService = Depends(get_expense_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.create(data),
        redirect_to=LIST_URL,
        message="Expense added",
        serialize=_dump,
    )


@router.post("/expenses/edit/{expense_id}")
async def edit_expense(
    expense_id: str,
    request: Request,
    service: ExpenseService = Depends(get_expense_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.update(expense_id, data),
        redirect_to=LIST_URL,
        message="Expense updated",
        serialize=_dump,
    )


@router.post("/expenses/delete/{expense_id}")
async def delete_expense(
    expense_id: str,
    request: Request,
    service: ExpenseService = Depends(get_expense_service),
    db: AsyncSession = Depends(get_db_session),
):
    return await run_mutation(
        request,
        db,
        lambda: service.delete(expense_id),
        redirect_to=LIST_URL,
        message="Expense deleted",
        serialize=_dump,
    )


@router.post("/expenses/{expense_id}/pay")
async def pay_expense(
    expense_id: str,
    request: Request,
    service: ExpenseService = Depends(get_expense_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.record_payment(expense_id, data),
        redirect_to=LIST_URL,
        message="Payment recorded",
        serialize=_dump,
    )
