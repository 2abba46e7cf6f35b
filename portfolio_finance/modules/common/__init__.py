"""Shared abstractions used across finance modules."""

from .exceptions import (
    CacheError,
    ConflictError,
    FinanceError,
    LedgerConsistencyError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from .status import (
    ExpenseStatus,
    PaymentStatus,
    Settlement,
    derive_status,
    expense_status,
    is_ledger_qualifying,
    payment_status,
)

__all__ = [
    "CacheError",
    "ConflictError",
    "FinanceError",
    "LedgerConsistencyError",
    "NotFoundError",
    "StorageUnavailableError",
    "ValidationError",
    "ExpenseStatus",
    "PaymentStatus",
    "Settlement",
    "derive_status",
    "expense_status",
    "is_ledger_qualifying",
    "payment_status",
]
