"""Category service. Categories are descriptive tags with no ledger effect."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Category as CategoryModel
from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.infrastructure.database.repositories.category_repository import SqlCategoryRepository
from portfolio_finance.modules.common.exceptions import NotFoundError
from portfolio_finance.modules.common.parsing import client_id

from .models import CategoryInput, CategorySnapshot
from .repository import CategoryRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CategoryService:
    repository: CategoryRepository
    cache: FinanceCache

    @classmethod
    def with_session(cls, session: AsyncSession, cache: FinanceCache) -> "CategoryService":
        return cls(SqlCategoryRepository(session), cache.for_session(session))

    async def list_categories(self, type: str | None = None) -> list[CategorySnapshot]:
        rows = await self.repository.list_categories(type)
        return [self._to_snapshot(row) for row in rows]

    async def create(self, data) -> CategorySnapshot:
        payload = CategoryInput.from_mapping(data)
        category = await self.repository.create_category(
            name=payload.name,
            type=payload.type,
            color=payload.color,
            icon=payload.icon,
            **client_id(data),
        )
        await self.cache.invalidate_for(["category"])
        logger.info("Category %s created (%s/%s)", category.id, category.type, category.name)
        return self._to_snapshot(category)

    async def update(self, category_id: str, data) -> CategorySnapshot:
        category = await self._load(category_id)
        payload = CategoryInput.from_mapping(data, current=category)
        category = await self.repository.update_category(
            category, name=payload.name, type=payload.type, color=payload.color, icon=payload.icon
        )
        await self.cache.invalidate_for(["category"])
        return self._to_snapshot(category)

    async def delete(self, category_id: str) -> CategorySnapshot:
        category = await self._load(category_id)
        snapshot = self._to_snapshot(category)
        await self.repository.delete_category(category)
        await self.cache.invalidate_for(["category"])
        logger.info("Category %s deleted", category_id)
        return snapshot

    async def _load(self, category_id: str) -> CategoryModel:
        category = await self.repository.get_category(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    @staticmethod
    def _to_snapshot(model: CategoryModel) -> CategorySnapshot:
        return CategorySnapshot(
            id=model.id,
            name=model.name,
            type=model.type,
            color=model.color,
            icon=model.icon,
            created_at=model.created_at,
        )


async def require_category(repository: CategoryRepository, category_id: str | None) -> None:
    if category_id is None:
        return
    if await repository.get_category(category_id) is None:
        raise NotFoundError("Category", category_id)
