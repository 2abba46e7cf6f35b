"""Payment routes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.infrastructure.cache import FinanceCache, keys
from portfolio_finance.infrastructure.health import StoreHealth
from portfolio_finance.interfaces.http.deps import get_cache, get_db_session, get_payment_service, get_store_health
from portfolio_finance.interfaces.http.responses import read_payload, run_mutation
from portfolio_finance.modules.payments import PaymentService
from portfolio_finance.schemas import PaymentResponse

router = APIRouter()

LIST_URL = "/admin/finance/payments"


def _dump(payment) -> dict:
    return PaymentResponse.model_validate(payment).model_dump(mode="json")


@router.get("/payments")
async def list_payments(
    service: PaymentService = Depends(get_payment_service),
    cache: FinanceCache = Depends(get_cache),
    health: StoreHealth = Depends(get_store_health),
):
    async def load():
        return [_dump(payment) for payment in await service.list_payments()]

    return await cache.read_through(keys.PAYMENTS, load, guard=health.ensure_available)


@router.get("/payments/{payment_id}", response_model=PaymentResponse)
async def get_payment(payment_id: str, service: PaymentService = Depends(get_payment_service)):
    return PaymentResponse.model_validate(await service.get_payment(payment_id))


@router.post("/payments/add")
async def add_payment(
    request: Request,
    service: PaymentService = Depends(get_payment_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.create(data),
        redirect_to=LIST_URL,
        message="Payment added",
        serialize=_dump,
    )


@router.post("/payments/edit/{payment_id}")
async def edit_payment(
    payment_id: str,
    request: Request,
    service: PaymentService = Depends(get_payment_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.update(payment_id, data),
        redirect_to=LIST_URL,
        message="Payment updated",
        serialize=_dump,
    )


@router.post("/payments/delete/{payment_id}")
async def delete_payment(
    payment_id: str,
    request: Request,
    service: PaymentService = Depends(get_payment_service),
    db: AsyncSession = Depends(get_db_session),
):
    return await run_mutation(
        request,
        db,
        lambda: service.delete(payment_id),
        redirect_to=LIST_URL,
        message="Payment deleted",
        serialize=_dump,
    )

