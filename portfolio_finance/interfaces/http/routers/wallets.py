"""Wallet and transfer routes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.infrastructure.cache import FinanceCache, keys
from portfolio_finance.infrastructure.health import StoreHealth
from portfolio_finance.interfaces.http.deps import (
    get_cache,
    get_db_session,
    get_ledger_service,
    get_report_service,
    get_store_health,
    get_transfer_service,
    get_wallet_service,
)
from portfolio_finance.interfaces.http.responses import read_payload, run_mutation
from portfolio_finance.modules.ledger import LedgerService
from portfolio_finance.modules.reports import ReportService
from portfolio_finance.modules.transfers import TransferService
from portfolio_finance.modules.wallets import WalletService
from portfolio_finance.schemas import (
    ReconcileResponse,
    TransferResponse,
    WalletDetailResponse,
    WalletHistoryItemResponse,
    WalletResponse,
)

router = APIRouter()

LIST_URL = "/admin/finance/wallets"


def _dump(wallet) -> dict:
    return WalletResponse.model_validate(wallet).model_dump(mode="json")


def _dump_transfer(transfer) -> dict:
    return TransferResponse.model_validate(transfer).model_dump(mode="json")


@router.get("/wallets")
async def list_wallets(
    service: WalletService = Depends(get_wallet_service),
    cache: FinanceCache = Depends(get_cache),
    health: StoreHealth = Depends(get_store_health),
):
    async def load():
        return [_dump(wallet) for wallet in await service.list_wallets()]

    return await cache.read_through(keys.WALLETS, load, guard=health.ensure_available)


@router.post("/wallets/add")
async def add_wallet(
    request: Request,
    service: WalletService = Depends(get_wallet_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.create(data),
        redirect_to=LIST_URL,
        message="Wallet added",
        serialize=_dump,
    )


@router.post("/wallets/edit/{wallet_id}")
async def edit_wallet(
    wallet_id: str,
    request: Request,
    service: WalletService = Depends(get_wallet_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.update(wallet_id, data),
        redirect_to=LIST_URL,
        message="Wallet updated",
        serialize=_dump,
    )


@router.post("/wallets/delete/{wallet_id}")
async def delete_wallet(
    wallet_id: str,
    request: Request,
    service: WalletService = Depends(get_wallet_service),
    db: AsyncSession = Depends(get_db_session),
):
    return await run_mutation(
        request,
        db,
        lambda: service.delete(wallet_id),
        redirect_to=LIST_URL,
        message="Wallet deleted",
        serialize=_dump,
    )


@router.post("/wallets/transfer")
async def transfer_funds(
    request: Request,
    service: TransferService = Depends(get_transfer_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.create(data),
        redirect_to=LIST_URL,
        message="Transfer successful",
        serialize=_dump_transfer,
    )


@router.get("/wallets/{wallet_id}", response_model=WalletDetailResponse)
async def view_wallet(
    wallet_id: str,
    limit: int | None = None,
    service: WalletService = Depends(get_wallet_service),
    reports: ReportService = Depends(get_report_service),
    transfers: TransferService = Depends(get_transfer_service),
    health: StoreHealth = Depends(get_store_health),
):
    await health.ensure_available()
    wallet = await service.get_wallet(wallet_id)
    history = await reports.wallet_history(wallet_id, limit)
    return WalletDetailResponse(
        wallet=WalletResponse.model_validate(wallet),
        history=[WalletHistoryItemResponse.model_validate(item) for item in history],
        transfers=[TransferResponse.model_validate(item) for item in await transfers.list_transfers(wallet_id)],
    )


@router.get("/wallets/{wallet_id}/reconcile", response_model=ReconcileResponse)
async def reconcile_wallet(wallet_id: str, ledger: LedgerService = Depends(get_ledger_service)):
    return ReconcileResponse.model_validate(await ledger.reconcile(wallet_id))


@router.get("/transfers", response_model=list[TransferResponse])
async def list_transfers(service: TransferService = Depends(get_transfer_service)):
    return [TransferResponse.model_validate(row) for row in await service.list_transfers()]


@router.post("/transfers/edit/{transfer_id}")
async def edit_transfer(
    transfer_id: str,
    request: Request,
    service: TransferService = Depends(get_transfer_service),
    db: AsyncSession = Depends(get_db_session),
):
    data = await read_payload(request)
    return await run_mutation(
        request,
        db,
        lambda: service.update(transfer_id, data),
        redirect_to=LIST_URL,
        message="Transfer updated",
        serialize=_dump_transfer,
    )


@router.post("/transfers/delete/{transfer_id}")
async def delete_transfer(
    transfer_id: str,
    request: Request,
    service: TransferService = Depends(get_transfer_service),
    db: AsyncSession = Depends(get_db_session),
):
    return await run_mutation(
        request,
        db,
        lambda: service.delete(transfer_id),
        redirect_to=LIST_URL,
        message="Transfer deleted",
        serialize=_dump_transfer,
    )
