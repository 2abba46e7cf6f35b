"""Wallet domain service"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Wallet as WalletModel
from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.infrastructure.database.repositories.ledger_repository import SqlLedgerRepository
from portfolio_finance.infrastructure.database.repositories.wallet_repository import SqlWalletRepository
from portfolio_finance.modules.common.exceptions import ConflictError, NotFoundError
from portfolio_finance.modules.common.parsing import client_id

from .models import WalletInput, WalletSnapshot
from .repository import WalletRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WalletService:
    repository: WalletRepository
    ledger_entries: SqlLedgerRepository
    cache: FinanceCache

    @classmethod
    def with_session(cls, session: AsyncSession, cache: FinanceCache) -> "WalletService":
        return cls(
            SqlWalletRepository(session),
            SqlLedgerRepository(session),
            cache.for_session(session),
        )

    async def list_wallets(self) -> list[WalletSnapshot]:
        rows = await self.repository.list_wallets()
        return [self._to_snapshot(row) for row in rows]

    async def get_wallet(self, wallet_id: str) -> WalletSnapshot:
        return self._to_snapshot(await self._load(wallet_id))

    async def create(self, data) -> WalletSnapshot:
        payload = WalletInput.from_mapping(data)
        wallet = await self.repository.create_wallet(
            name=payload.name,
            type=payload.type,
            currency=payload.currency,
            color=payload.color,
            is_default=payload.is_default,
            **client_id(data),
        )
        await self.cache.invalidate_for(["wallet"])
        logger.info("Wallet %s created (%s)", wallet.id, wallet.name)
        return self._to_snapshot(wallet)

    async def update(self, wallet_id: str, data) -> WalletSnapshot:
        current = await self._load(wallet_id)
        payload = WalletInput.from_mapping(data, current=current)
        wallet = await self.repository.update_wallet(
            wallet_id,
            name=payload.name,
            type=payload.type,
            currency=payload.currency,
            color=payload.color,
            is_default=payload.is_default,
        )
        await self.cache.invalidate_for(["wallet"])
        return self._to_snapshot(wallet)

    async def delete(self, wallet_id: str) -> WalletSnapshot:
        wallet = await self._load(wallet_id)
        if await self.repository.is_referenced(wallet_id):
            raise ConflictError("Wallet is still used by expenses, income, payments or transfers")
        snapshot = self._to_snapshot(wallet)
        await self.ledger_entries.delete_for_wallet(wallet_id)
        await self.repository.delete_wallet(wallet)
        await self.cache.invalidate_for(["wallet"])
        logger.info("Wallet %s deleted", wallet_id)
        return snapshot

    async def total_balance(self) -> Decimal:
        return await self.repository.total_balance()

    async def _load(self, wallet_id: str) -> WalletModel:
        wallet = await self.repository.get_wallet(wallet_id)
        if wallet is None:
            raise NotFoundError("Wallet", wallet_id)
        return wallet

    @staticmethod
    def _to_snapshot(model: WalletModel) -> WalletSnapshot:
        return WalletSnapshot(
            id=model.id,
            name=model.name,
            type=model.type,
            balance=Decimal(model.balance or 0),
            currency=model.currency,
            color=model.color,
            is_default=bool(model.is_default),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
