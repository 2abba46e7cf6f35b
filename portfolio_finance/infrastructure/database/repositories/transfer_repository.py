"""SQLAlchemy implementation for transfers"""

from __future__ import annotations

from typing import Any

from sqlalchemy import desc, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Transfer


class SqlTransferRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_transfer(self, transfer_id: str) -> Transfer | None:
        stmt = select(Transfer).where(Transfer.id == transfer_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_transfers(self, wallet_id: str | None = None) -> list[Transfer]:
        stmt = select(Transfer)
        if wallet_id is not None:
            stmt = stmt.where(or_(Transfer.from_wallet_id == wallet_id, Transfer.to_wallet_id == wallet_id))
        stmt = stmt.order_by(desc(Transfer.date), desc(Transfer.created_at))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_transfer(self, **fields: Any) -> Transfer:
        transfer = Transfer(**fields)
        self.session.add(transfer)
        await self.session.flush()
        return transfer

    async def update_transfer(self, transfer: Transfer, **fields: Any) -> Transfer:
        for name, value in fields.items():
            setattr(transfer, name, value)
        await self.session.flush()
        return transfer

    async def delete_transfer(self, transfer: Transfer) -> None:
        await self.session.delete(transfer)
        await self.session.flush()
