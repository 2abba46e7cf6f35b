"""Repository protocol for ledger entries."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence

from portfolio_finance.db.models import LedgerEntry as LedgerEntryModel


class LedgerRepository(Protocol):
    async def add_entry(
        self,
        *,
        wallet_id: str,
        source_type: str,
        source_id: str,
        amount: Decimal,
        kind: str,
        description: str | None,
    ) -> LedgerEntryModel:
        ...

    async def net_for_source(self, source_type: str, source_id: str) -> dict[str, Decimal]:
        ...

    async def sum_for_wallet(self, wallet_id: str) -> Decimal:
        ...

    async def list_for_wallet(self, wallet_id: str, limit: int | None = None) -> Sequence[LedgerEntryModel]:
        ...
