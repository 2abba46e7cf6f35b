"""Expense mutation helpers.

Every create, update, delete and partial payment runs the same sequence:
revert the effect computed from the stored row, persist, apply the effect of
the new row, then drop the affected cache keys. Callers own the transaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Expense as ExpenseModel
from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.infrastructure.database.repositories.category_repository import SqlCategoryRepository
from portfolio_finance.infrastructure.database.repositories.expense_repository import SqlExpenseRepository
from portfolio_finance.modules.categories import CategoryRepository, require_category
from portfolio_finance.modules.common.exceptions import NotFoundError, ValidationError
from portfolio_finance.modules.common.parsing import client_id
from portfolio_finance.modules.common.status import expense_status
from portfolio_finance.modules.ledger import LedgerService, expense_effects
from portfolio_finance.modules.ledger.effects import Effects
from portfolio_finance.modules.notifications import NotificationService

from .models import (
    ExpenseInput,
    ExpensePaymentInput,
    ExpensePaymentRecord,
    ExpenseSnapshot,
)
from .repository import ExpenseRepository

logger = logging.getLogger(__name__)

SOURCE_TYPE = "expense"


def _effects(model: ExpenseModel) -> Effects:
    return expense_effects(
        wallet_id=model.wallet_id,
        status=model.status,
        paid_amount=Decimal(model.paid_amount or 0),
    )


@dataclass(slots=True)
class ExpenseService:
    repository: ExpenseRepository
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
    ) -> "ExpenseService":
        return cls(
            SqlExpenseRepository(session),
            LedgerService.with_session(session),
            cache.for_session(session),
            notifier or NotificationService.with_session(session),
            SqlCategoryRepository(session),
        )

    async def list_expenses(self) -> list[ExpenseSnapshot]:
        rows = await self.repository.list_expenses()
        return [self._to_snapshot(row) for row in rows]

    async def get_expense(self, expense_id: str) -> ExpenseSnapshot:
        return self._to_snapshot(await self._load(expense_id))

    async def create(self, data) -> ExpenseSnapshot:
        payload = ExpenseInput.from_mapping(data)
        await self.ledger.require_wallet(payload.wallet_id)
        await require_category(self.categories, payload.category_id)
        status = expense_status(payload.amount, payload.paid_amount)

        history = []
        if payload.paid_amount > 0:
            history.append(
                {
                    "amount": payload.paid_amount,
                    "date": payload.date,
                    "method": payload.payment_method,
                    "wallet_id": payload.wallet_id,
                    "notes": "Initial payment",
                }
            )
        expense = await self.repository.create_expense(
            history=history,
            status=status.value,
            **self._fields(payload),
            **client_id(data),
        )
        await self.ledger.apply(SOURCE_TYPE, expense.id, _effects(expense), f"Expense: {expense.title}")
        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info("Expense %s created (%s %s)", expense.id, expense.amount, status.value)

        await self.notifier.notify(
            "Expense added",
            f"{expense.title}: {expense.amount} ({status.value})",
            link="/admin/finance/expenses",
        )
        return self._to_snapshot(expense)

    async def update(self, expense_id: str, data) -> ExpenseSnapshot:
        expense = await self._load(expense_id)
        payload = ExpenseInput.from_mapping(data, current=expense)
        await self.ledger.require_wallet(payload.wallet_id)
        await require_category(self.categories, payload.category_id)

        await self.ledger.revert(SOURCE_TYPE, expense.id, _effects(expense), f"Expense edited: {expense.title}")
        status = expense_status(payload.amount, payload.paid_amount)
        expense = await self.repository.update_expense(expense, status=status.value, **self._fields(payload))
        await self.ledger.apply(SOURCE_TYPE, expense.id, _effects(expense), f"Expense: {expense.title}")

        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info("Expense %s updated (%s %s)", expense.id, expense.amount, status.value)
        return self._to_snapshot(expense)

    async def delete(self, expense_id: str) -> ExpenseSnapshot:
        expense = await self._load(expense_id)
        snapshot = self._to_snapshot(expense)
        await self.ledger.revert(SOURCE_TYPE, expense.id, _effects(expense), f"Expense deleted: {expense.title}")
        await self.repository.delete_expense(expense)
        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info("Expense %s deleted", expense_id)
        return snapshot

    async def record_payment(self, expense_id: str, data) -> ExpenseSnapshot:
        """Append a partial payment and move the extra amount out of the wallet."""
        expense = await self._load(expense_id)
        payment = ExpensePaymentInput.from_mapping(data)

        amount_due = Decimal(expense.amount) - Decimal(expense.paid_amount or 0)
        if payment.amount > amount_due:
            raise ValidationError(f"Payment exceeds the amount due ({amount_due})")
        if payment.wallet_id is not None and payment.wallet_id != expense.wallet_id:
            raise ValidationError("Payments must use the expense's wallet")

        await self.ledger.revert(SOURCE_TYPE, expense.id, _effects(expense), f"Expense payment: {expense.title}")
        paid_amount = Decimal(expense.paid_amount or 0) + payment.amount
        status = expense_status(Decimal(expense.amount), paid_amount)
        expense = await self.repository.update_expense(expense, paid_amount=paid_amount, status=status.value)
        expense = await self.repository.add_payment(
            expense,
            amount=payment.amount,
            date=payment.date,
            method=payment.method or expense.payment_method,
            wallet_id=expense.wallet_id,
            notes=payment.notes,
        )
        await self.ledger.apply(SOURCE_TYPE, expense.id, _effects(expense), f"Expense: {expense.title}")

        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info("Expense %s paid %s, now %s", expense.id, payment.amount, status.value)
        await self.notifier.notify(
            "Payment recorded",
            f"{payment.amount} paid towards {expense.title}",
            type="success",
            link="/admin/finance/expenses",
        )
        return self._to_snapshot(expense)

    async def _load(self, expense_id: str) -> ExpenseModel:
        expense = await self.repository.get_expense(expense_id)
        if expense is None:
            raise NotFoundError("Expense", expense_id)
        return expense

    @staticmethod
    def _fields(payload: ExpenseInput) -> dict:
        return {
            "title": payload.title,
            "category": payload.category,
            "category_id": payload.category_id,
            "amount": payload.amount,
            "paid_amount": payload.paid_amount,
            "wallet_id": payload.wallet_id,
            "payment_method": payload.payment_method,
            "date": payload.date,
            "is_recurring": payload.is_recurring,
            "recurring_frequency": payload.recurring_frequency,
            "next_due_date": payload.next_due_date,
            "notes": payload.notes,
        }

    @staticmethod
    def _to_snapshot(model: ExpenseModel) -> ExpenseSnapshot:
        return ExpenseSnapshot(
            id=model.id,
            title=model.title,
            category=model.category,
            category_id=model.category_id,
            amount=Decimal(model.amount),
            paid_amount=Decimal(model.paid_amount or 0),
            status=model.status,
            wallet_id=model.wallet_id,
            payment_method=model.payment_method,
            date=model.date,
            is_recurring=bool(model.is_recurring),
            recurring_frequency=model.recurring_frequency,
            next_due_date=model.next_due_date,
            notes=model.notes,
            created_at=model.created_at,
            payment_history=[
                ExpensePaymentRecord(
                    amount=Decimal(row.amount),
                    date=row.date,
                    method=row.method,
                    wallet_id=row.wallet_id,
                    notes=row.notes,
                )
                for row in model.payment_history
            ],
        )
