"""Domain models for income."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from portfolio_finance.modules.common.exceptions import ValidationError
from portfolio_finance.modules.common.parsing import (
    merged,
    parse_bool,
    parse_choice,
    parse_date,
    parse_money,
    parse_ref,
    parse_text,
)
from portfolio_finance.modules.expenses.models import RECURRING_FREQUENCIES


@dataclass(slots=True)
class IncomeSnapshot:
    id: str
    source: str
    amount: Decimal
    wallet_id: str
    date: dt.date
    category_id: Optional[str] = None
    notes: Optional[str] = None
    is_recurring: bool = False
    recurring_frequency: Optional[str] = None
    next_due_date: Optional[dt.date] = None
    created_at: Optional[dt.datetime] = None


@dataclass(slots=True)
class IncomeInput:
    source: str
    amount: Decimal
    wallet_id: str
    date: dt.date
    category_id: Optional[str] = None
    notes: Optional[str] = None
    is_recurring: bool = False
    recurring_frequency: Optional[str] = None
    next_due_date: Optional[dt.date] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], current: Any = None) -> "IncomeInput":
        wallet_id = parse_ref(merged(data, current, "wallet_id", "wallet", "walletId"))
        if wallet_id is None:
            raise ValidationError("Wallet is required")
        is_recurring = parse_bool(merged(data, current, "is_recurring", "isRecurring"))
        frequency = parse_text(merged(data, current, "recurring_frequency", "recurringFrequency"), "Frequency")
        if frequency is not None:
            frequency = parse_choice(frequency, "Frequency", RECURRING_FREQUENCIES)

        return cls(
            source=parse_text(merged(data, current, "source"), "Source", required=True),
            amount=parse_money(merged(data, current, "amount"), "Amount"),
            wallet_id=wallet_id,
            date=parse_date(merged(data, current, "date"), "Date", default=dt.date.today()),
            category_id=parse_ref(merged(data, current, "category_id", "category", "categoryId")),
            notes=parse_text(merged(data, current, "notes"), "Notes"),
            is_recurring=is_recurring,
            recurring_frequency=frequency if is_recurring else None,
            next_due_date=parse_date(merged(data, current, "next_due_date", "nextDueDate"), "Next due date"),
        )
