"""People routes; balances are derived from payments on every read."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.infrastructure.cache import FinanceCache, keys
from portfolio_finance.infrastructure.health import StoreHealth
from portfolio_finance.interfaces.http.deps import (
    get_cache,
    get_db_session,
    get_payment_service,
    get_person_service,
    get_store_health,
)
from portfolio_finance.interfaces.http.responses import read_payload, run_mutation
from portfolio_finance.modules.payments import PaymentService
from portfolio_finance.modules.people import PersonService
from portfolio_finance.schemas import (
    PaymentResponse,
    PersonBalanceResponse,
    PersonDetailResponse,
    PersonResponse,
)

router = APIRouter()

LIST_URL = "/admin/finance/people"


def _dump(person) -> dict:
    return PersonResponse.model_validate(person).model_dump(mode="json")


@router.get("/people")
async def list_people(
    service: PersonService = Depends(get_person_service),
    cache: FinanceCache = Depends(get_cache),
    health: StoreHealth = Depends(get_store_health),
):
    async def load():
        return [
            PersonBalanceResponse.model_validate(row).model_dump(mode="json")
            for row in await service.list_people()
        ]

    return await cache.read_through(keys.PEOPLE, load, guard=health.ensure_available)


@router.get("/people/{person_id}", response_model=PersonDetailResponse)
async def view_person(
    person_id: str,
    service: PersonService = Depends(get_person_service),
    payments: PaymentService = Depends(get_payment_service),
    health: StoreHealth = Depends(get_store_health),
):
    await health.ensure_available()
    balance = await service.get_balance(person_id)
    rows = await payments.list_payments(person_id)
    return PersonDetailResponse(
        person=PersonResponse.model_validate(balance.person),
        total_given=balance.total_given,
        total_received=balance.total_received,
        balance=balance.balance,
        payments=[PaymentResponse.model_validate(row) for row in rows],
    )


@router.post("/people/add")
async def add_person(
    request: Request,
    service: PersonService = Depends(get_person_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.create(data),
        redirect_to=LIST_URL,
        message="Person added",
        serialize=_dump,
    )


@router.post("/people/edit/{person_id}")
async def edit_person(
    person_id: str,
    request: Request,
    service: PersonService = Depends(get_person_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.update(person_id, data),
        redirect_to=LIST_URL,
        message="Person updated",
        serialize=_dump,
    )


@router.post("/people/delete/{person_id}")
async def delete_person(
    person_id: str,
    request: Request,
    service: PersonService = Depends(get_person_service),
    db: AsyncSession = Depends(get_db_session),
):
    return await run_mutation(
        request,
        db,
        lambda: service.delete(person_id),
        redirect_to=LIST_URL,
        message="Person deleted",
        serialize=_dump,
    )
