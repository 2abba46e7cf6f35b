"""Wallet ledger service: the only writer of wallet balances."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import LedgerEntry as LedgerEntryModel
from portfolio_finance.infrastructure.database.repositories.ledger_repository import SqlLedgerRepository
from portfolio_finance.infrastructure.database.repositories.wallet_repository import SqlWalletRepository
from portfolio_finance.modules.common.exceptions import LedgerConsistencyError, NotFoundError
from portfolio_finance.modules.wallets.repository import WalletRepository

from .effects import Effects, net_by_wallet
from .models import LedgerEntryRecord, ReconcileReport
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LedgerService:
    """Applies and reverts wallet effects of money movements.

    Every balance change is an atomic increment paired with an immutable
    ledger entry, so a wallet's balance can always be recomputed as the sum
    of its entries. A source's outstanding effect is the net of its entries;
    applying requires it to be zero, reverting requires it to match exactly.
    """

    entries: LedgerRepository
    wallets: WalletRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "LedgerService":
        return cls(SqlLedgerRepository(session), SqlWalletRepository(session))

    async def apply(
        self,
        source_type: str,
        source_id: str,
        effects: Effects,
        description: str | None = None,
    ) -> None:
        if not effects:
            return
        outstanding = await self.entries.net_for_source(source_type, source_id)
        if outstanding:
            raise LedgerConsistencyError(
                f"{source_type} {source_id} already has an applied effect; revert it first"
            )
        for effect in effects:
            await self._post(source_type, source_id, effect.wallet_id, effect.amount, "apply", description)
        logger.debug("Applied %s %s: %s", source_type, source_id, effects)

    async def revert(
        self,
        source_type: str,
        source_id: str,
        effects: Effects,
        description: str | None = None,
    ) -> None:
        """Post the exact inverse of ``effects``, computed from pre-mutation state."""
        outstanding = await self.entries.net_for_source(source_type, source_id)
        expected = net_by_wallet(effects)
        if outstanding != expected:
            raise LedgerConsistencyError(
                f"{source_type} {source_id} outstanding effect {outstanding} "
                f"does not match revert request {expected}"
            )
        for effect in effects:
            await self._post(source_type, source_id, effect.wallet_id, -effect.amount, "revert", description)
        if effects:
            logger.debug("Reverted %s %s: %s", source_type, source_id, effects)

    async def require_wallet(self, wallet_id: str | None) -> None:
        if wallet_id is None:
            return
        if await self.wallets.get_wallet(wallet_id) is None:
            raise NotFoundError("Wallet", wallet_id)

    async def outstanding(self, source_type: str, source_id: str) -> dict[str, Decimal]:
        return await self.entries.net_for_source(source_type, source_id)

    async def reconcile(self, wallet_id: str) -> ReconcileReport:
        wallet = await self.wallets.get_wallet(wallet_id)
        if wallet is None:
            raise NotFoundError("Wallet", wallet_id)
        ledger_balance = await self.entries.sum_for_wallet(wallet_id)
        report = ReconcileReport(
            wallet_id=wallet_id,
            stored_balance=Decimal(wallet.balance).quantize(Decimal("0.01")),
            ledger_balance=ledger_balance,
        )
        if not report.consistent:
            logger.error("Wallet %s drifted from its ledger by %s", wallet_id, report.drift)
        return report

    async def list_entries(self, wallet_id: str, limit: int | None = None) -> list[LedgerEntryRecord]:
        rows = await self.entries.list_for_wallet(wallet_id, limit)
        return [self._to_record(row) for row in rows]

    async def _post(
        self,
        source_type: str,
        source_id: str,
        wallet_id: str,
        amount: Decimal,
        kind: str,
        description: str | None,
    ) -> None:
        await self.wallets.increment_balance(wallet_id, amount)
        await self.entries.add_entry(
            wallet_id=wallet_id,
            source_type=source_type,
            source_id=source_id,
            amount=amount,
            kind=kind,
            description=description,
        )

    @staticmethod
    def _to_record(model: LedgerEntryModel) -> LedgerEntryRecord:
        return LedgerEntryRecord(
            id=model.id,
            wallet_id=model.wallet_id,
            source_type=model.source_type,
            source_id=model.source_id,
            amount=Decimal(model.amount),
            kind=model.kind,
            description=model.description,
            created_at=model.created_at,
        )
