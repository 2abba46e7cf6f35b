"""Repository protocol for income."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from portfolio_finance.db.models import Income as IncomeModel


class IncomeRepository(Protocol):
    async def get_income(self, income_id: str) -> IncomeModel | None:
        ...

    async def list_income(self) -> Sequence[IncomeModel]:
        ...

    async def create_income(self, **fields: Any) -> IncomeModel:
        ...

    async def update_income(self, income: IncomeModel, **fields: Any) -> IncomeModel:
        ...

    async def delete_income(self, income: IncomeModel) -> None:
        ...
