"""SQLAlchemy-backed repository implementations."""

from .category_repository import SqlCategoryRepository
from .expense_repository import SqlExpenseRepository
from .income_repository import SqlIncomeRepository
from .ledger_repository import SqlLedgerRepository
from .notification_repository import SqlNotificationRepository
from .payment_repository import SqlPaymentRepository
from .person_repository import SqlPersonRepository
from .report_repository import SqlReportRepository
from .transfer_repository import SqlTransferRepository
from .wallet_repository import SqlWalletRepository

__all__ = [
    "SqlCategoryRepository",
    "SqlExpenseRepository",
    "SqlIncomeRepository",
    "SqlLedgerRepository",
    "SqlNotificationRepository",
    "SqlPaymentRepository",
    "SqlPersonRepository",
    "SqlReportRepository",
    "SqlTransferRepository",
    "SqlWalletRepository",
]
