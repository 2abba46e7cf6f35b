"""Dashboard and report routes."""

from fastapi import APIRouter, Depends

from portfolio_finance.infrastructure.health import StoreHealth
from portfolio_finance.interfaces.http.deps import get_report_service, get_store_health, get_wallet_service
from portfolio_finance.modules.reports import ReportService
from portfolio_finance.modules.wallets import WalletService
from portfolio_finance.schemas import DashboardResponse, ExpenseReportResponse, WalletResponse

router = APIRouter()


@router.get("/", response_model=DashboardResponse)
async def dashboard(
    filter: str = "all",
    search: str | None = None,
    reports: ReportService = Depends(get_report_service),
    wallets: WalletService = Depends(get_wallet_service),
    health: StoreHealth = Depends(get_store_health),
):
    await health.ensure_available()
    response = DashboardResponse.model_validate(await reports.dashboard(filter, search or None))
    response.wallets = [WalletResponse.model_validate(wallet) for wallet in await wallets.list_wallets()]
    return response


@router.get("/reports", response_model=ExpenseReportResponse)
async def expense_report(
    reports: ReportService = Depends(get_report_service),
    health: StoreHealth = Depends(get_store_health),
):
    await health.ensure_available()
    return ExpenseReportResponse.model_validate(await reports.expense_report())
