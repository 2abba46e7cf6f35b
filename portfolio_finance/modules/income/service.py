"""Income mutation helpers. Income is settled on creation and always credits its wallet."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Income as IncomeModel
from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.infrastructure.database.repositories.category_repository import SqlCategoryRepository
from portfolio_finance.infrastructure.database.repositories.income_repository import SqlIncomeRepository
from portfolio_finance.modules.categories import CategoryRepository, require_category
from portfolio_finance.modules.common.exceptions import NotFoundError
from portfolio_finance.modules.common.parsing import client_id
from portfolio_finance.modules.ledger import LedgerService, income_effects
from portfolio_finance.modules.ledger.effects import Effects
from portfolio_finance.modules.notifications import NotificationService

from .models import IncomeInput, IncomeSnapshot
from .repository import IncomeRepository

logger = logging.getLogger(__name__)

SOURCE_TYPE = "income"


def _effects(model: IncomeModel) -> Effects:
    return income_effects(wallet_id=model.wallet_id, amount=Decimal(model.amount))


@dataclass(slots=True)
class IncomeService:
    repository: IncomeRepository
    ledger: LedgerService
    cache: FinanceCache
    notifier: NotificationService
    categories: CategoryRepository

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        cache: FinanceCache,
        notifier: NotificationService | None = None,
    ) -> "IncomeService":
        return cls(
            SqlIncomeRepository(session),
            LedgerService.with_session(session),
            cache.for_session(session),
            notifier or NotificationService.with_session(session),
            SqlCategoryRepository(session),
        )

    async def list_income(self) -> list[IncomeSnapshot]:
        rows = await self.repository.list_income()
        return [self._to_snapshot(row) for row in rows]

    async def get_income(self, income_id: str) -> IncomeSnapshot:
        return self._to_snapshot(await self._load(income_id))

    async def create(self, data) -> IncomeSnapshot:
        payload = IncomeInput.from_mapping(data)
        await self.ledger.require_wallet(payload.wallet_id)
        await require_category(self.categories, payload.category_id)
        income = await self.repository.create_income(**self._fields(payload), **client_id(data))
        await self.ledger.apply(SOURCE_TYPE, income.id, _effects(income), f"Income: {income.source}")
        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info("Income %s created (%s)", income.id, income.amount)

        await self.notifier.notify(
            "Income received",
            f"{income.source}: {income.amount}",
            type="success",
            link="/admin/finance/income",
        )
        return self._to_snapshot(income)

    async def update(self, income_id: str, data) -> IncomeSnapshot:
        income = await self._load(income_id)
        payload = IncomeInput.from_mapping(data, current=income)
        await self.ledger.require_wallet(payload.wallet_id)
        await require_category(self.categories, payload.category_id)

        await self.ledger.revert(SOURCE_TYPE, income.id, _effects(income), f"Income edited: {income.source}")
        income = await self.repository.update_income(income, **self._fields(payload))
        await self.ledger.apply(SOURCE_TYPE, income.id, _effects(income), f"Income: {income.source}")

        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info("Income %s updated (%s)", income.id, income.amount)
        return self._to_snapshot(income)

    async def delete(self, income_id: str) -> IncomeSnapshot:
        income = await self._load(income_id)
        snapshot = self._to_snapshot(income)
        await self.ledger.revert(SOURCE_TYPE, income.id, _effects(income), f"Income deleted: {income.source}")
        await self.repository.delete_income(income)
        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info("Income %s deleted", income_id)
        return snapshot

    async def _load(self, income_id: str) -> IncomeModel:
        income = await self.repository.get_income(income_id)
        if income is None:
            raise NotFoundError("Income", income_id)
        return income

    @staticmethod
    def _fields(payload: IncomeInput) -> dict:
        return {
            "source": payload.source,
            "amount": payload.amount,
            "wallet_id": payload.wallet_id,
            "category_id": payload.category_id,
            "date": payload.date,
            "notes": payload.notes,
            "is_recurring": payload.is_recurring,
            "recurring_frequency": payload.recurring_frequency,
            "next_due_date": payload.next_due_date,
        }

    @staticmethod
    def _to_snapshot(model: IncomeModel) -> IncomeSnapshot:
        return IncomeSnapshot(
            id=model.id,
            source=model.source,
            amount=Decimal(model.amount),
            wallet_id=model.wallet_id,
            date=model.date,
            category_id=model.category_id,
            notes=model.notes,
            is_recurring=bool(model.is_recurring),
            recurring_frequency=model.recurring_frequency,
            next_due_date=model.next_due_date,
            created_at=model.created_at,
        )
