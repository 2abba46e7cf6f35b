"""Repository protocol for expenses."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from portfolio_finance.db.models import Expense as ExpenseModel


class ExpenseRepository(Protocol):
    async def get_expense(self, expense_id: str) -> ExpenseModel | None:
        ...

    async def list_expenses(self) -> Sequence[ExpenseModel]:
        ...

    async def create_expense(self, *, history: Sequence[dict[str, Any]] = (), **fields: Any) -> ExpenseModel:
        ...

    async def update_expense(self, expense: ExpenseModel, **fields: Any) -> ExpenseModel:
        ...

    async def add_payment(self, expense: ExpenseModel, **fields: Any) -> ExpenseModel:
        ...

    async def delete_expense(self, expense: ExpenseModel) -> None:
        ...
