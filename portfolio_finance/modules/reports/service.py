"""Dashboard and report aggregation.

Nothing here writes. Overdue is classified on read from due dates; stored
statuses are left exactly as the mutation helpers derived them.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Expense, Income
from portfolio_finance.infrastructure.database.repositories.report_repository import SqlReportRepository
from portfolio_finance.modules.ledger import LedgerService

from .models import (
    ZERO,
    ActivityItem,
    Dashboard,
    ExpenseReport,
    FinancialSummary,
    GroupTotal,
    MonthlyTotal,
    OverdueItem,
    UpcomingItem,
    WalletHistoryItem,
)

logger = logging.getLogger(__name__)

ACTIVITY_FILTERS = ("all", "expense", "income", "people")
TREND_MONTHS = 6
UPCOMING_DAYS = 30


def financial_health_score(summary: FinancialSummary) -> int:
    """Heuristic 0-100 score from savings rate, net worth and pending debts."""
    score = 50
    if summary.total_income > 0:
        savings_rate = (summary.total_income - summary.total_expenses) / summary.total_income
        if savings_rate > Decimal("0.5"):
            score += 30
        elif savings_rate > Decimal("0.2"):
            score += 20
        elif savings_rate > 0:
            score += 10
        else:
            score -= 10

    if summary.total_wallet_balance > 0:
        score += 10
    if summary.total_wallet_balance > 50000:
        score += 10

    if summary.pending_to_send == 0:
        score += 10
    else:
        score -= 5
    return max(0, min(score, 100))


def months_ago(day: dt.date, months: int) -> dt.date:
    """First day of the month ``months`` before ``day``'s month."""
    index = day.year * 12 + day.month - 1 - months
    return dt.date(index // 12, index % 12 + 1, 1)


def monthly_totals(rows: Iterable[tuple[dt.date, Decimal]]) -> list[MonthlyTotal]:
    buckets: dict[tuple[int, int], Decimal] = {}
    for day, amount in rows:
        key = (day.year, day.month)
        buckets[key] = buckets.get(key, ZERO) + amount
    return [MonthlyTotal(year, month, total) for (year, month), total in sorted(buckets.items())]


@dataclass(slots=True)
class ReportService:
    repository: SqlReportRepository
    ledger: LedgerService

    @classmethod
    def with_session(cls, session: AsyncSession) -> "ReportService":
        return cls(SqlReportRepository(session), LedgerService.with_session(session))

    async def summary(self) -> FinancialSummary:
        summary = FinancialSummary(
            total_expenses=await self.repository.total_amount(Expense),
            total_income=await self.repository.total_amount(Income),
            total_wallet_balance=await self.repository.total_wallet_balance(),
        )
        for kind, status, total in await self.repository.payment_totals():
            settled = status == "Completed"
            if kind == "send":
                if settled:
                    summary.total_sent += total
                else:
                    summary.pending_to_send += total
            elif settled:
                summary.total_received += total
            else:
                summary.pending_to_receive += total
        return summary

    async def overdue(self, today: dt.date | None = None) -> list[OverdueItem]:
        today = today or dt.date.today()
        items = [
            OverdueItem(
                kind="expense",
                id=expense.id,
                title=expense.title,
                amount_due=Decimal(expense.amount) - Decimal(expense.paid_amount or 0),
                due_date=expense.next_due_date,
                stored_status=expense.status,
            )
            for expense in await self.repository.expenses_due_before(today)
        ]
        items.extend(
            OverdueItem(
                kind="payment",
                id=payment.id,
                title=f"{payment.type} {payment.amount}",
                amount_due=Decimal(payment.amount) - Decimal(payment.paid_amount or 0),
                due_date=payment.end_date,
                stored_status=payment.status,
            )
            for payment in await self.repository.payments_due_before(today)
        )
        items.sort(key=lambda item: item.due_date)
        return items

    async def upcoming(self, today: dt.date | None = None, limit: int = 5) -> list[UpcomingItem]:
        today = today or dt.date.today()
        rows = await self.repository.expenses_due_between(
            today, today + dt.timedelta(days=UPCOMING_DAYS), limit
        )
        return [
            UpcomingItem(
                id=row.id,
                title=row.title,
                amount=Decimal(row.amount),
                next_due_date=row.next_due_date,
                status=row.status,
            )
            for row in rows
        ]

    async def recent_activity(
        self,
        filter: str = "all",
        search: str | None = None,
        limit: int = 20,
    ) -> list[ActivityItem]:
        if filter not in ACTIVITY_FILTERS:
            filter = "all"
        items: list[ActivityItem] = []
        if filter in ("all", "expense"):
            items.extend(
                ActivityItem("expense", row.id, row.title, Decimal(row.amount), row.date, row.status, row.wallet_id)
                for row in await self.repository.recent_expenses(search, limit)
            )
        if filter in ("all", "income"):
            items.extend(
                ActivityItem("income", row.id, row.source, Decimal(row.amount), row.date, None, row.wallet_id)
                for row in await self.repository.recent_income(search, limit)
            )
        if filter in ("all", "people"):
            for payment, person_name in await self.repository.recent_payments(search, limit):
                items.append(
                    ActivityItem(
                        "payment",
                        payment.id,
                        f"{payment.type} {person_name or 'Unknown'}",
                        Decimal(payment.amount),
                        payment.date,
                        payment.status,
                        payment.wallet_id,
                    )
                )
        items.sort(key=lambda item: item.date, reverse=True)
        return items[:limit]

    async def dashboard(
        self,
        filter: str = "all",
        search: str | None = None,
        today: dt.date | None = None,
    ) -> Dashboard:
        today = today or dt.date.today()
        summary = await self.summary()
        since = months_ago(today, TREND_MONTHS - 1)
        people = await self.repository.people_by_type()
        return Dashboard(
            summary=summary,
            health_score=financial_health_score(summary),
            expense_trend=monthly_totals(await self.repository.dated_amounts(Expense, since)),
            income_trend=monthly_totals(await self.repository.dated_amounts(Income, since)),
            top_categories=[
                GroupTotal(key=name, total=total) for name, total in await self.repository.category_totals(limit=5)
            ],
            people_by_type=[GroupTotal(key=kind, total=Decimal(count)) for kind, count in people],
            people_total=sum(count for _, count in people),
            upcoming=await self.upcoming(today),
            overdue=await self.overdue(today),
            recent_activity=await self.recent_activity(filter, search),
        )

    async def expense_report(self) -> ExpenseReport:
        rows = await self.repository.dated_amounts(Expense)
        yearly: dict[int, Decimal] = {}
        for day, amount in rows:
            yearly[day.year] = yearly.get(day.year, ZERO) + amount
        return ExpenseReport(
            monthly=monthly_totals(rows),
            yearly=[GroupTotal(key=str(year), total=total) for year, total in sorted(yearly.items())],
            by_category=[
                GroupTotal(key=name, total=total) for name, total in await self.repository.category_totals()
            ],
            by_wallet=[
                GroupTotal(key=wallet_id, label=name or "No wallet", total=total)
                for wallet_id, name, total in await self.repository.wallet_expense_totals()
            ],
        )

    async def wallet_history(self, wallet_id: str, limit: int | None = None) -> list[WalletHistoryItem]:
        """Ledger entries newest first, each with the balance right after it posted."""
        await self.ledger.require_wallet(wallet_id)
        entries = list(reversed(await self.ledger.list_entries(wallet_id)))
        running = ZERO
        history = []
        for entry in entries:
            running += entry.amount
            history.append(
                WalletHistoryItem(
                    entry_id=entry.id,
                    source_type=entry.source_type,
                    source_id=entry.source_id,
                    kind=entry.kind,
                    amount=entry.amount,
                    balance_after=running,
                    description=entry.description,
                    created_at=entry.created_at,
                )
            )
        history.reverse()
        return history[:limit] if limit is not None else history
