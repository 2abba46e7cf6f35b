"""Aggregation queries backing the dashboard and reports"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Expense, Income, Payment, Person, Wallet


def _money(value: Any) -> Decimal:
    return Decimal(str(value or 0)).quantize(Decimal("0.01"))


class SqlReportRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def total_amount(self, model: type[Expense] | type[Income]) -> Decimal:
        stmt = select(func.coalesce(func.sum(model.amount), 0))
        return _money((await self.session.execute(stmt)).scalar_one())

    async def total_wallet_balance(self) -> Decimal:
        stmt = select(func.coalesce(func.sum(Wallet.balance), 0))
        return _money((await self.session.execute(stmt)).scalar_one())

    async def payment_totals(self) -> list[tuple[str, str, Decimal]]:
        stmt = select(Payment.type, Payment.status, func.sum(Payment.amount)).group_by(
            Payment.type, Payment.status
        )
        rows = (await self.session.execute(stmt)).all()
        return [(kind, status, _money(total)) for kind, status, total in rows]

    async def dated_amounts(
        self,
        model: type[Expense] | type[Income],
        since: dt.date | None = None,
    ) -> list[tuple[dt.date, Decimal]]:
        stmt = select(model.date, model.amount)
        if since is not None:
            stmt = stmt.where(model.date >= since)
        rows = (await self.session.execute(stmt)).all()
        return [(day, _money(amount)) for day, amount in rows]

    async def category_totals(self, limit: int | None = None) -> list[tuple[str, Decimal]]:
        total = func.sum(Expense.amount)
        stmt = select(Expense.category, total).group_by(Expense.category).order_by(desc(total))
        if limit is not None:
            stmt = stmt.limit(limit)
        rows = (await self.session.execute(stmt)).all()
        return [(category, _money(amount)) for category, amount in rows]

    async def wallet_expense_totals(self) -> list[tuple[str | None, str | None, Decimal]]:
        stmt = (
            select(Expense.wallet_id, Wallet.name, func.sum(Expense.amount))
            .outerjoin(Wallet, Wallet.id == Expense.wallet_id)
            .group_by(Expense.wallet_id, Wallet.name)
        )
        rows = (await self.session.execute(stmt)).all()
        return [(wallet_id, name, _money(amount)) for wallet_id, name, amount in rows]

    async def people_by_type(self) -> list[tuple[str, int]]:
        stmt = select(Person.type, func.count(Person.id)).group_by(Person.type).order_by(Person.type)
        rows = (await self.session.execute(stmt)).all()
        return [(kind, int(count)) for kind, count in rows]

    async def expenses_due_before(self, day: dt.date) -> list[Expense]:
        stmt = (
            select(Expense)
            .where(Expense.next_due_date.is_not(None), Expense.next_due_date < day, Expense.status != "Paid")
            .order_by(Expense.next_due_date)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def payments_due_before(self, day: dt.date) -> list[Payment]:
        stmt = (
            select(Payment)
            .where(Payment.end_date.is_not(None), Payment.end_date < day, Payment.status != "Completed")
            .order_by(Payment.end_date)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def expenses_due_between(self, start: dt.date, end: dt.date, limit: int) -> list[Expense]:
        stmt = (
            select(Expense)
            .where(Expense.next_due_date >= start, Expense.next_due_date <= end, Expense.status != "Paid")
            .order_by(Expense.next_due_date)
            .limit(limit)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def recent_expenses(self, search: str | None, limit: int) -> list[Expense]:
        stmt = select(Expense)
        if search:
            stmt = stmt.where(Expense.title.ilike(f"%{search}%"))
        stmt = stmt.order_by(desc(Expense.date)).limit(limit)
        return list((await self.session.execute(stmt)).scalars().all())

    async def recent_income(self, search: str | None, limit: int) -> list[Income]:
        stmt = select(Income)
        if search:
            stmt = stmt.where(Income.source.ilike(f"%{search}%"))
        stmt = stmt.order_by(desc(Income.date)).limit(limit)
        return list((await self.session.execute(stmt)).scalars().all())

    async def recent_payments(self, search: str | None, limit: int) -> list[tuple[Payment, str | None]]:
        stmt = select(Payment, Person.name).outerjoin(Person, Person.id == Payment.person_id)
        if search:
            stmt = stmt.where(Person.name.ilike(f"%{search}%"))
        stmt = stmt.order_by(desc(Payment.date)).limit(limit)
        return [(payment, name) for payment, name in (await self.session.execute(stmt)).all()]
