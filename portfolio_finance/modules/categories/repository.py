"""Repository protocol for categories."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from portfolio_finance.db.models import Category as CategoryModel


class CategoryRepository(Protocol):
    async def get_category(self, category_id: str) -> CategoryModel | None:
        ...

    async def list_categories(self, type: str | None = None) -> Sequence[CategoryModel]:
        ...

    async def create_category(self, **fields: Any) -> CategoryModel:
        ...

    async def update_category(self, category: CategoryModel, **fields: Any) -> CategoryModel:
        ...

    async def delete_category(self, category: CategoryModel) -> None:
        ...
