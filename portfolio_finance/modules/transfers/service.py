"""Transfer mutation helpers. Both legs post in the caller's transaction."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Transfer as TransferModel
from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.infrastructure.database.repositories.transfer_repository import SqlTransferRepository
from portfolio_finance.modules.common.exceptions import NotFoundError
from portfolio_finance.modules.common.parsing import client_id
from portfolio_finance.modules.ledger import LedgerService, transfer_effects
from portfolio_finance.modules.ledger.effects import Effects

from .models import TransferInput, TransferSnapshot
from .repository import TransferRepository

logger = logging.getLogger(__name__)

SOURCE_TYPE = "transfer"


def _effects(model: TransferModel) -> Effects:
    return transfer_effects(
        from_wallet_id=model.from_wallet_id,
        to_wallet_id=model.to_wallet_id,
        amount=Decimal(model.amount),
    )


@dataclass(slots=True)
class TransferService:
    repository: TransferRepository
    ledger: LedgerService
    cache: FinanceCache

    @classmethod
    def with_session(cls, session: AsyncSession, cache: FinanceCache) -> "TransferService":
        return cls(
            SqlTransferRepository(session),
            LedgerService.with_session(session),
            cache.for_session(session),
        )

    async def list_transfers(self, wallet_id: str | None = None) -> list[TransferSnapshot]:
        rows = await self.repository.list_transfers(wallet_id)
        return [self._to_snapshot(row) for row in rows]

    async def create(self, data) -> TransferSnapshot:
        payload = TransferInput.from_mapping(data)
        await self.ledger.require_wallet(payload.from_wallet_id)
        await self.ledger.require_wallet(payload.to_wallet_id)
        transfer = await self.repository.create_transfer(**self._fields(payload), **client_id(data))
        await self.ledger.apply(SOURCE_TYPE, transfer.id, _effects(transfer), payload.notes or "Transfer")
        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info(
            "Transfer %s: %s from %s to %s",
            transfer.id,
            transfer.amount,
            transfer.from_wallet_id,
            transfer.to_wallet_id,
        )
        return self._to_snapshot(transfer)

    async def update(self, transfer_id: str, data) -> TransferSnapshot:
        transfer = await self._load(transfer_id)
        payload = TransferInput.from_mapping(data, current=transfer)
        await self.ledger.require_wallet(payload.from_wallet_id)
        await self.ledger.require_wallet(payload.to_wallet_id)

        await self.ledger.revert(SOURCE_TYPE, transfer.id, _effects(transfer), "Transfer edited")
        transfer = await self.repository.update_transfer(transfer, **self._fields(payload))
        await self.ledger.apply(SOURCE_TYPE, transfer.id, _effects(transfer), payload.notes or "Transfer")

        await self.cache.invalidate_for([SOURCE_TYPE])
        return self._to_snapshot(transfer)

    async def delete(self, transfer_id: str) -> TransferSnapshot:
        transfer = await self._load(transfer_id)
        snapshot = self._to_snapshot(transfer)
        await self.ledger.revert(SOURCE_TYPE, transfer.id, _effects(transfer), "Transfer deleted")
        await self.repository.delete_transfer(transfer)
        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info("Transfer %s deleted", transfer_id)
        return snapshot

    async def _load(self, transfer_id: str) -> TransferModel:
        transfer = await self.repository.get_transfer(transfer_id)
        if transfer is None:
            raise NotFoundError("Transfer", transfer_id)
        return transfer

    @staticmethod
    def _fields(payload: TransferInput) -> dict:
        return {
            "from_wallet_id": payload.from_wallet_id,
            "to_wallet_id": payload.to_wallet_id,
            "amount": payload.amount,
            "date": payload.date,
            "notes": payload.notes,
        }

    @staticmethod
    def _to_snapshot(model: TransferModel) -> TransferSnapshot:
        return TransferSnapshot(
            id=model.id,
            from_wallet_id=model.from_wallet_id,
            to_wallet_id=model.to_wallet_id,
            amount=Decimal(model.amount),
            date=model.date,
            notes=model.notes,
            created_at=model.created_at,
        )
