"""Expense domain exports"""

from .models import (
    PAYMENT_METHODS,
    RECURRING_FREQUENCIES,
    ExpenseInput,
    ExpensePaymentInput,
    ExpensePaymentRecord,
    ExpenseSnapshot,
)
from .service import ExpenseService

__all__ = [
    "PAYMENT_METHODS",
    "RECURRING_FREQUENCIES",
    "ExpenseInput",
    "ExpensePaymentInput",
    "ExpensePaymentRecord",
    "ExpenseSnapshot",
    "ExpenseService",
]
