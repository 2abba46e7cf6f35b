"""SQLAlchemy implementation for income"""

from __future__ import annotations

from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Income


class SqlIncomeRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_income(self, income_id: str) -> Income | None:
        stmt = select(Income).where(Income.id == income_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_income(self) -> list[Income]:
        stmt = select(Income).order_by(desc(Income.date), desc(Income.created_at))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_income(self, **fields: Any) -> Income:
        income = Income(**fields)
        self.session.add(income)
        await self.session.flush()
        return income

    async def update_income(self, income: Income, **fields: Any) -> Income:
        for name, value in fields.items():
            setattr(income, name, value)
        await self.session.flush()
        return income

    async def delete_income(self, income: Income) -> None:
        await self.session.delete(income)
        await self.session.flush()
