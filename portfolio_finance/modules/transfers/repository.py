"""Repository protocol for transfers."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from portfolio_finance.db.models import Transfer as TransferModel


class TransferRepository(Protocol):
    async def get_transfer(self, transfer_id: str) -> TransferModel | None:
        ...

    async def list_transfers(self, wallet_id: str | None = None) -> Sequence[TransferModel]:
        ...

    async def create_transfer(self, **fields: Any) -> TransferModel:
        ...

    async def update_transfer(self, transfer: TransferModel, **fields: Any) -> TransferModel:
        ...

    async def delete_transfer(self, transfer: TransferModel) -> None:
        ...
