"""Pydantic schemas used across the project."""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TokenData(BaseModel):
    subject: str
    role: str
    username: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True
    message: str = "OK"
    data: Optional[Any] = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    offline: Optional[bool] = None


class WalletResponse(BaseModel):
    id: str
    name: str
    type: str
    balance: Decimal
    currency: str
    color: Optional[str] = None
    is_default: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ExpensePaymentResponse(BaseModel):
    amount: Decimal
    date: date
    method: Optional[str] = None
    wallet_id: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ExpenseResponse(BaseModel):
    id: str
    title: str
    category: str
    category_id: Optional[str] = None
    amount: Decimal
    paid_amount: Decimal
    amount_due: Decimal
    status: str
    wallet_id: Optional[str] = None
    payment_method: str
    date: date
    is_recurring: bool = False
    recurring_frequency: Optional[str] = None
    next_due_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    payment_history: list[ExpensePaymentResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class IncomeResponse(BaseModel):
    id: str
    source: str
    amount: Decimal
    wallet_id: str
    category_id: Optional[str] = None
    date: date
    notes: Optional[str] = None
    is_recurring: bool = False
    recurring_frequency: Optional[str] = None
    next_due_date: Optional[date] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PaymentResponse(BaseModel):
    id: str
    person_id: str
    wallet_id: Optional[str] = None
    type: str
    amount: Decimal
    paid_amount: Decimal
    amount_due: Decimal
    status: str
    method: str
    date: date
    end_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TransferResponse(BaseModel):
    id: str
    from_wallet_id: str
    to_wallet_id: str
    amount: Decimal
    date: date
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PersonResponse(BaseModel):
    id: str
    name: str
    type: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PersonBalanceResponse(BaseModel):
    person: PersonResponse
    total_given: Decimal
    total_received: Decimal
    balance: Decimal

    model_config = ConfigDict(from_attributes=True)


class PersonDetailResponse(PersonBalanceResponse):
    payments: list[PaymentResponse] = Field(default_factory=list)


class CategoryResponse(BaseModel):
    id: str
    name: str
    type: str
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class NotificationResponse(BaseModel):
    id: str
    title: str
    message: str
    type: str
    read: bool
    link: Optional[str] = None
    date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class NotificationListResponse(BaseModel):
    unread: int
    notifications: list[NotificationResponse]


class WalletHistoryItemResponse(BaseModel):
    entry_id: int
    source_type: str
    source_id: str
    kind: str
    amount: Decimal
    balance_after: Decimal
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WalletDetailResponse(BaseModel):
    wallet: WalletResponse
    history: list[WalletHistoryItemResponse]
    transfers: list[TransferResponse] = Field(default_factory=list)


class ReconcileResponse(BaseModel):
    wallet_id: str
    stored_balance: Decimal
    ledger_balance: Decimal
    drift: Decimal
    consistent: bool

    model_config = ConfigDict(from_attributes=True)


class SummaryResponse(BaseModel):
    total_expenses: Decimal
    total_income: Decimal
    total_sent: Decimal
    total_received: Decimal
    pending_to_send: Decimal
    pending_to_receive: Decimal
    total_wallet_balance: Decimal

    model_config = ConfigDict(from_attributes=True)


class MonthlyTotalResponse(BaseModel):
    year: int
    month: int
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class GroupTotalResponse(BaseModel):
    key: Optional[str] = None
    label: Optional[str] = None
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class OverdueItemResponse(BaseModel):
    kind: str
    id: str
    title: str
    amount_due: Decimal
    due_date: date
    stored_status: str
    days_overdue: int

    model_config = ConfigDict(from_attributes=True)


class UpcomingItemResponse(BaseModel):
    id: str
    title: str
    amount: Decimal
    next_due_date: date
    status: str

    model_config = ConfigDict(from_attributes=True)


class ActivityItemResponse(BaseModel):
    kind: str
    id: str
    title: str
    amount: Decimal
    date: date
    status: Optional[str] = None
    wallet_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class DashboardResponse(BaseModel):
    summary: SummaryResponse
    health_score: int
    wallets: list[WalletResponse] = Field(default_factory=list)
    expense_trend: list[MonthlyTotalResponse] = Field(default_factory=list)
    income_trend: list[MonthlyTotalResponse] = Field(default_factory=list)
    top_categories: list[GroupTotalResponse] = Field(default_factory=list)
    people_by_type: list[GroupTotalResponse] = Field(default_factory=list)
    people_total: int = 0
    upcoming: list[UpcomingItemResponse] = Field(default_factory=list)
    overdue: list[OverdueItemResponse] = Field(default_factory=list)
    recent_activity: list[ActivityItemResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class ExpenseReportResponse(BaseModel):
    monthly: list[MonthlyTotalResponse]
    yearly: list[GroupTotalResponse]
    by_category: list[GroupTotalResponse]
    by_wallet: list[GroupTotalResponse]

    model_config = ConfigDict(from_attributes=True)


class SyncRequest(BaseModel):
    changes: Optional[Any] = None


class SyncResultResponse(BaseModel):
    success: bool
    change: Any
    error: Optional[str] = None


class SyncResponse(BaseModel):
    success: bool = True
    results: list[SyncResultResponse] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    database: bool
    cache: bool
