"""SQLAlchemy implementation for expenses"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Expense, ExpensePayment


class SqlExpenseRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_expense(self, expense_id: str) -> Expense | None:
        stmt = (
            select(Expense)
            .where(Expense.id == expense_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_expenses(self) -> list[Expense]:
        stmt = select(Expense).order_by(desc(Expense.date), desc(Expense.created_at))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_expense(self, *, history: Sequence[dict[str, Any]] = (), **fields: Any) -> Expense:
        expense = Expense(**fields)
        expense.payment_history = [
            ExpensePayment(position=index, **row) for index, row in enumerate(history)
        ]
        self.session.add(expense)
        await self.session.flush()
        return expense

    async def update_expense(self, expense: Expense, **fields: Any) -> Expense:
        for name, value in fields.items():
            setattr(expense, name, value)
        await self.session.flush()
        return expense

    async def add_payment(self, expense: Expense, **fields: Any) -> Expense:
        position = len(expense.payment_history)
        expense.payment_history.append(ExpensePayment(position=position, **fields))
        await self.session.flush()
        return expense

    async def delete_expense(self, expense: Expense) -> None:
        await self.session.delete(expense)
        await self.session.flush()
