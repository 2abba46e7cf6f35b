"""Server-side replay of offline-queued finance writes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.modules.categories import CategoryService
from portfolio_finance.modules.common.exceptions import FinanceError, ValidationError
from portfolio_finance.modules.expenses import ExpenseService
from portfolio_finance.modules.income import IncomeService
from portfolio_finance.modules.notifications import NotificationService
from portfolio_finance.modules.payments import PaymentService
from portfolio_finance.modules.people import PersonService
from portfolio_finance.modules.transfers import TransferService
from portfolio_finance.modules.wallets import WalletService

from .classifier import CREATE, DELETE, PAY, UPDATE, classify
from .models import ChangeTarget, SyncChange, SyncResult

logger = logging.getLogger(__name__)

Handler = Callable[[ChangeTarget, dict[str, Any]], Awaitable[Any]]


@dataclass(slots=True)
class SyncReplayService:
    """Applies a batch in order, each change inside its own SAVEPOINT.

    A failing change rolls back only its own writes and is reported in its
    result entry; the changes after it are still attempted.
    """

    session: AsyncSession
    cache: FinanceCache
    handlers: dict[tuple[str, str], Handler]

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        cache: FinanceCache,
        notifier: NotificationService | None = None,
    ) -> "SyncReplayService":
        notifier = notifier or NotificationService.with_session(session)
        expenses = ExpenseService.with_session(session, cache, notifier)
        income = IncomeService.with_session(session, cache, notifier)
        payments = PaymentService.with_session(session, cache, notifier)
        transfers = TransferService.with_session(session, cache)
        wallets = WalletService.with_session(session, cache)
        people = PersonService.with_session(session, cache)
        categories = CategoryService.with_session(session, cache)

        handlers: dict[tuple[str, str], Handler] = {
            ("expenses", PAY): lambda t, body: expenses.record_payment(t.target_id, body),
            ("transfers", CREATE): lambda t, body: transfers.create(body),
            ("transfers", UPDATE): lambda t, body: transfers.update(t.target_id, body),
            ("transfers", DELETE): lambda t, body: transfers.delete(t.target_id),
        }
        for entity, service in (
            ("expenses", expenses),
            ("income", income),
            ("payments", payments),
            ("wallets", wallets),
            ("people", people),
            ("categories", categories),
        ):
            handlers[(entity, CREATE)] = lambda t, body, s=service: s.create(body)
            handlers[(entity, UPDATE)] = lambda t, body, s=service: s.update(t.target_id, body)
            handlers[(entity, DELETE)] = lambda t, body, s=service: s.delete(t.target_id)
        return cls(session, cache.for_session(session), handlers)

    async def replay(self, changes: Sequence[Any]) -> list[SyncResult]:
        results: list[SyncResult] = []
        for index, raw in enumerate(changes):
            try:
                async with self.session.begin_nested():
                    await self._apply(raw)
            except (FinanceError, SQLAlchemyError) as exc:
                logger.warning("Sync change %d failed: %s", index, exc)
                results.append(SyncResult(success=False, change=raw, error=str(exc)))
            else:
                results.append(SyncResult(success=True, change=raw))

        await self.cache.invalidate_all()
        failed = sum(1 for result in results if not result.success)
        logger.info("Replayed %d sync changes (%d failed)", len(results), failed)
        return results

    async def _apply(self, raw: Any) -> None:
        change = SyncChange.from_mapping(raw)
        target = classify(change)
        handler = self.handlers.get((target.entity, target.action))
        if handler is None:
            raise ValidationError(f"No handler for {target.entity}/{target.action}")
        await handler(target, change.body)

