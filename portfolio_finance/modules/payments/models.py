"""Domain models for payments to and from people."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from portfolio_finance.modules.common.exceptions import ValidationError
from portfolio_finance.modules.common.parsing import (
    MISSING,
    lookup,
    merged,
    parse_choice,
    parse_date,
    parse_money,
    parse_ref,
    parse_text,
)

PAYMENT_TYPES = ("send", "receive")
PAYMENT_METHODS = ("Cash", "Bank", "JazzCash", "EasyPaisa", "Other")


@dataclass(slots=True)
class PaymentSnapshot:
    id: str
    person_id: str
    type: str
    amount: Decimal
    paid_amount: Decimal
    status: str
    method: str
    date: dt.date
    wallet_id: Optional[str] = None
    end_date: Optional[dt.date] = None
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    @property
    def amount_due(self) -> Decimal:
        return self.amount - self.paid_amount


@dataclass(slots=True)
class PaymentInput:
    person_id: str
    type: str
    amount: Decimal
    paid_amount: Decimal
    date: dt.date
    method: str = "Cash"
    wallet_id: Optional[str] = None
    end_date: Optional[dt.date] = None
    notes: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], current: Any = None) -> "PaymentInput":
        """Unlike expenses, an unspecified paid amount means nothing has moved yet."""
        person_id = parse_ref(merged(data, current, "person_id", "person", "personId"))
        if person_id is None:
            raise ValidationError("Person is required")
        raw_paid = lookup(data, "paid_amount", "paidAmount")
        if raw_paid is MISSING:
            raw_paid = current.paid_amount if current is not None else None
        paid_amount = parse_money(raw_paid, "Paid amount", required=False)

        return cls(
            person_id=person_id,
            type=parse_choice(merged(data, current, "type"), "Type", PAYMENT_TYPES),
            amount=parse_money(merged(data, current, "amount"), "Amount"),
            paid_amount=paid_amount if paid_amount is not None else Decimal("0.00"),
            date=parse_date(merged(data, current, "date"), "Date", default=dt.date.today()),
            method=parse_choice(merged(data, current, "method"), "Method", PAYMENT_METHODS, default="Cash"),
            wallet_id=parse_ref(merged(data, current, "wallet_id", "wallet", "walletId")),
            end_date=parse_date(merged(data, current, "end_date", "endDate"), "End date"),
            notes=parse_text(merged(data, current, "notes"), "Notes"),
        )
