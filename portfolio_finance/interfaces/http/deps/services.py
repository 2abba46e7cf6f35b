"""Finance service providers bound to the request's session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.core.config import Settings, get_settings
from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.modules.categories import CategoryService
from portfolio_finance.modules.expenses import ExpenseService
from portfolio_finance.modules.income import IncomeService
from portfolio_finance.modules.ledger import LedgerService
from portfolio_finance.modules.notifications import NotificationService
from portfolio_finance.modules.payments import PaymentService
from portfolio_finance.modules.people import PersonService
from portfolio_finance.modules.reports import ReportService
from portfolio_finance.modules.sync import SyncReplayService
from portfolio_finance.modules.transfers import TransferService
from portfolio_finance.modules.wallets import WalletService

from .database import get_db_session
from .infrastructure import get_cache


def get_notification_service(
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> NotificationService:
    return NotificationService.with_session(db, enabled=settings.notifications_enabled)


def get_expense_service(
    db: AsyncSession = Depends(get_db_session),
    cache: FinanceCache = Depends(get_cache),
    notifier: NotificationService = Depends(get_notification_service),
) -> ExpenseService:
    return ExpenseService.with_session(db, cache, notifier)


def get_income_service(
    db: AsyncSession = Depends(get_db_session),
    cache: FinanceCache = Depends(get_cache),
    notifier: NotificationService = Depends(get_notification_service),
) -> IncomeService:
    return IncomeService.with_session(db, cache, notifier)


def get_payment_service(
    db: AsyncSession = Depends(get_db_session),
    cache: FinanceCache = Depends(get_cache),
    notifier: NotificationService = Depends(get_notification_service),
) -> PaymentService:
    return PaymentService.with_session(db, cache, notifier)


def get_transfer_service(
    db: AsyncSession = Depends(get_db_session),
    cache: FinanceCache = Depends(get_cache),
) -> TransferService:
    return TransferService.with_session(db, cache)


def get_wallet_service(
    db: AsyncSession = Depends(get_db_session),
    cache: FinanceCache = Depends(get_cache),
) -> WalletService:
    return WalletService.with_session(db, cache)


def get_person_service(
    db: AsyncSession = Depends(get_db_session),
    cache: FinanceCache = Depends(get_cache),
) -> PersonService:
    return PersonService.with_session(db, cache)


def get_category_service(
    db: AsyncSession = Depends(get_db_session),
    cache: FinanceCache = Depends(get_cache),
) -> CategoryService:
    return CategoryService.with_session(db, cache)


def get_ledger_service(db: AsyncSession = Depends(get_db_session)) -> LedgerService:
    return LedgerService.with_session(db)


def get_report_service(db: AsyncSession = Depends(get_db_session)) -> ReportService:
    return ReportService.with_session(db)


def get_sync_service(
    db: AsyncSession = Depends(get_db_session),
    cache: FinanceCache = Depends(get_cache),
    notifier: NotificationService = Depends(get_notification_service),
) -> SyncReplayService:
    return SyncReplayService.with_session(db, cache, notifier)
