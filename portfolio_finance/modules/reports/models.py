"""Read-side report models."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

ZERO = Decimal("0.00")


@dataclass(slots=True)
class FinancialSummary:
    total_expenses: Decimal = ZERO
    total_income: Decimal = ZERO
    total_sent: Decimal = ZERO
    total_received: Decimal = ZERO
    pending_to_send: Decimal = ZERO
    pending_to_receive: Decimal = ZERO
    total_wallet_balance: Decimal = ZERO


@dataclass(slots=True)
class MonthlyTotal:
    year: int
    month: int
    total: Decimal


@dataclass(slots=True)
class GroupTotal:
    key: Optional[str]
    total: Decimal
    label: Optional[str] = None


@dataclass(slots=True)
class OverdueItem:
    """A record whose due date has passed while it is still unsettled."""

    kind: str
    id: str
    title: str
    amount_due: Decimal
    due_date: dt.date
    stored_status: str

    @property
    def days_overdue(self) -> int:
        return (dt.date.today() - self.due_date).days


@dataclass(slots=True)
class UpcomingItem:
    id: str
    title: str
    amount: Decimal
    next_due_date: dt.date
    status: str


@dataclass(slots=True)
class ActivityItem:
    kind: str
    id: str
    title: str
    amount: Decimal
    date: dt.date
    status: Optional[str] = None
    wallet_id: Optional[str] = None


@dataclass(slots=True)
class WalletHistoryItem:
    entry_id: int
    source_type: str
    source_id: str
    kind: str
    amount: Decimal
    balance_after: Decimal
    description: Optional[str]
    created_at: Optional[dt.datetime]


@dataclass(slots=True)
class Dashboard:
    summary: FinancialSummary
    health_score: int
    expense_trend: list[MonthlyTotal] = field(default_factory=list)
    income_trend: list[MonthlyTotal] = field(default_factory=list)
    top_categories: list[GroupTotal] = field(default_factory=list)
    people_by_type: list[GroupTotal] = field(default_factory=list)
    people_total: int = 0
    upcoming: list[UpcomingItem] = field(default_factory=list)
    overdue: list[OverdueItem] = field(default_factory=list)
    recent_activity: list[ActivityItem] = field(default_factory=list)


@dataclass(slots=True)
class ExpenseReport:
    monthly: list[MonthlyTotal] = field(default_factory=list)
    yearly: list[GroupTotal] = field(default_factory=list)
    by_category: list[GroupTotal] = field(default_factory=list)
    by_wallet: list[GroupTotal] = field(default_factory=list)
