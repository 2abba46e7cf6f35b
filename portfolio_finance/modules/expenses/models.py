"""Domain models for expenses."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Optional

from portfolio_finance.modules.common.exceptions import ValidationError
from portfolio_finance.modules.common.parsing import (
    MISSING,
    lookup,
    merged,
    parse_bool,
    parse_choice,
    parse_date,
    parse_money,
    parse_ref,
    parse_text,
)

PAYMENT_METHODS = ("Cash", "Bank", "JazzCash", "EasyPaisa", "Credit Card", "Other")
RECURRING_FREQUENCIES = ("Weekly", "Monthly", "Yearly")


@dataclass(slots=True)
class ExpensePaymentRecord:
    amount: Decimal
    date: dt.date
    method: Optional[str] = None
    wallet_id: Optional[str] = None
    notes: Optional[str] = None


@dataclass(slots=True)
class ExpenseSnapshot:
    id: str
    title: str
    category: str
    category_id: Optional[str]
    amount: Decimal
    paid_amount: Decimal
    status: str
    wallet_id: Optional[str]
    payment_method: str
    date: dt.date
    is_recurring: bool = False
    recurring_frequency: Optional[str] = None
    next_due_date: Optional[dt.date] = None
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    payment_history: list[ExpensePaymentRecord] = field(default_factory=list)

    @property
    def amount_due(self) -> Decimal:
        return self.amount - self.paid_amount


@dataclass(slots=True)
class ExpenseInput:
    title: str
    category: str
    amount: Decimal
    paid_amount: Decimal
    date: dt.date
    category_id: Optional[str] = None
    wallet_id: Optional[str] = None
    payment_method: str = "Cash"
    is_recurring: bool = False
    recurring_frequency: Optional[str] = None
    next_due_date: Optional[dt.date] = None
    notes: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], current: Any = None) -> "ExpenseInput":
        """Build from submitted fields; on edits, absent fields keep ``current`` values.

        A blank paid amount means "not specified" and settles the full amount.
        """
        amount = parse_money(merged(data, current, "amount"), "Amount")
        raw_paid = lookup(data, "paid_amount", "paidAmount")
        if raw_paid is MISSING and current is not None:
            raw_paid = current.paid_amount
        paid_amount = parse_money(None if raw_paid is MISSING else raw_paid, "Paid amount", required=False)
        if paid_amount is None:
            paid_amount = amount

        is_recurring = parse_bool(merged(data, current, "is_recurring", "isRecurring"))
        frequency = parse_text(merged(data, current, "recurring_frequency", "recurringFrequency"), "Frequency")
        if frequency is not None:
            frequency = parse_choice(frequency, "Frequency", RECURRING_FREQUENCIES)
        if is_recurring and frequency is None:
            raise ValidationError("Frequency is required for recurring expenses")

        return cls(
            title=parse_text(merged(data, current, "title"), "Title", required=True),
            category=parse_text(merged(data, current, "category"), "Category", required=True),
            amount=amount,
            paid_amount=paid_amount,
            date=parse_date(merged(data, current, "date"), "Date", default=dt.date.today()),
            category_id=parse_ref(merged(data, current, "category_id", "categoryId")),
            wallet_id=parse_ref(merged(data, current, "wallet_id", "wallet", "walletId")),
            payment_method=parse_choice(
                merged(data, current, "payment_method", "paymentMethod"),
                "Payment method",
                PAYMENT_METHODS,
                default="Cash",
            ),
            is_recurring=is_recurring,
            recurring_frequency=frequency if is_recurring else None,
            next_due_date=parse_date(merged(data, current, "next_due_date", "nextDueDate"), "Next due date"),
            notes=parse_text(merged(data, current, "notes"), "Notes"),
        )


@dataclass(slots=True)
class ExpensePaymentInput:
    """A partial payment recorded against an expense."""

    amount: Decimal
    date: dt.date
    method: Optional[str] = None
    wallet_id: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ExpensePaymentInput":
        method = lookup(data, "method", "paymentMethod", "payment_method")
        return cls(
            amount=parse_money(data.get("amount"), "Amount", positive=True),
            date=parse_date(data.get("date"), "Date", default=dt.date.today()),
            method=None if method is MISSING else parse_choice(method, "Method", PAYMENT_METHODS, default="Cash"),
            wallet_id=parse_ref(data.get("wallet_id", data.get("wallet"))),
            notes=parse_text(data.get("notes"), "Notes"),
        )
