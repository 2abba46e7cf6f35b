"""Repository protocol for wallet operations."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol, Sequence

from portfolio_finance.db.models import Wallet as WalletModel


class WalletRepository(Protocol):
    async def get_wallet(self, wallet_id: str) -> WalletModel | None:
        ...

    async def list_wallets(self) -> Sequence[WalletModel]:
        ...

    async def create_wallet(self, **fields: Any) -> WalletModel:
        ...

    async def update_wallet(self, wallet_id: str, **fields: Any) -> WalletModel:
        ...

    async def delete_wallet(self, wallet: WalletModel) -> None:
        ...

    async def increment_balance(self, wallet_id: str, delta: Decimal) -> WalletModel:
        ...

    async def is_referenced(self, wallet_id: str) -> bool:
        ...

    async def total_balance(self) -> Decimal:
        ...
