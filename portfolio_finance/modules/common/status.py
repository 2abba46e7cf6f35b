"""Settlement status derivation for expenses and payments."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from .exceptions import ValidationError


class Settlement(str, Enum):
    SETTLED = "settled"
    PARTIAL = "partial"
    PENDING = "pending"


class ExpenseStatus(str, Enum):
    PENDING = "Pending"
    PARTIAL = "Partial"
    PAID = "Paid"
    OVERDUE = "Overdue"


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    PARTIAL = "Partial"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


# Statuses meaning funds have actually moved.
LEDGER_QUALIFYING = frozenset({"Paid", "Partial", "Completed"})


def derive_status(amount: Decimal, paid_amount: Decimal) -> Settlement:
    """Compare what is owed with what was paid.

    The boundary is inclusive: paying exactly ``amount`` settles the record.
    Overdue is never produced here; reporting classifies it from due dates.
    """
    if amount < 0:
        raise ValidationError("amount must not be negative")
    if paid_amount < 0:
        raise ValidationError("paid amount must not be negative")
    if paid_amount >= amount:
        return Settlement.SETTLED
    if paid_amount > 0:
        return Settlement.PARTIAL
    return Settlement.PENDING


_EXPENSE_STATUS = {
    Settlement.SETTLED: ExpenseStatus.PAID,
    Settlement.PARTIAL: ExpenseStatus.PARTIAL,
    Settlement.PENDING: ExpenseStatus.PENDING,
}

_PAYMENT_STATUS = {
    Settlement.SETTLED: PaymentStatus.COMPLETED,
    Settlement.PARTIAL: PaymentStatus.PARTIAL,
    Settlement.PENDING: PaymentStatus.PENDING,
}


def expense_status(amount: Decimal, paid_amount: Decimal) -> ExpenseStatus:
    return _EXPENSE_STATUS[derive_status(amount, paid_amount)]


def payment_status(amount: Decimal, paid_amount: Decimal) -> PaymentStatus:
    return _PAYMENT_STATUS[derive_status(amount, paid_amount)]


def is_ledger_qualifying(status: str | None) -> bool:
    return status in LEDGER_QUALIFYING
