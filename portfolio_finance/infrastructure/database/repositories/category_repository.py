"""SQLAlchemy implementation for categories"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Category, Expense, Income


class SqlCategoryRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_category(self, category_id: str) -> Category | None:
        stmt = select(Category).where(Category.id == category_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_categories(self, type: str | None = None) -> list[Category]:
        stmt = select(Category)
        if type is not None:
            stmt = stmt.where(Category.type == type)
        stmt = stmt.order_by(Category.type, Category.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_category(self, **fields: Any) -> Category:
        category = Category(**fields)
        self.session.add(category)
        await self.session.flush()
        return category

    async def update_category(self, category: Category, **fields: Any) -> Category:
        for name, value in fields.items():
            setattr(category, name, value)
        await self.session.flush()
        return category

    async def delete_category(self, category: Category) -> None:
        # SQLite only honours ON DELETE SET NULL with foreign keys enabled
        for model in (Expense, Income):
            await self.session.execute(
                update(model)
                .where(model.category_id == category.id)
                .values(category_id=None)
                .execution_options(synchronize_session=False)
            )
        await self.session.delete(category)
        await self.session.flush()
