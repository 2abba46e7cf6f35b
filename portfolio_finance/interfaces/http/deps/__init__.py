"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .infrastructure import get_cache, get_store_health
from .services import (
    get_category_service,
    get_expense_service,
    get_income_service,
    get_ledger_service,
    get_notification_service,
    get_payment_service,
    get_person_service,
    get_report_service,
    get_sync_service,
    get_transfer_service,
    get_wallet_service,
)

__all__ = [
    "get_db_session",
    "get_cache",
    "get_store_health",
    "get_category_service",
    "get_expense_service",
    "get_income_service",
    "get_ledger_service",
    "get_notification_service",
    "get_payment_service",
    "get_person_service",
    "get_report_service",
    "get_sync_service",
    "get_transfer_service",
    "get_wallet_service",
]
