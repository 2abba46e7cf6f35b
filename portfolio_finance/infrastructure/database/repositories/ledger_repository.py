"""SQLAlchemy implementation for ledger entries"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import LedgerEntry


class SqlLedgerRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add_entry(
        self,
        *,
        wallet_id: str,
        source_type: str,
        source_id: str,
        amount: Decimal,
        kind: str,
        description: str | None,
    ) -> LedgerEntry:
        entry = LedgerEntry(
            wallet_id=wallet_id,
            source_type=source_type,
            source_id=source_id,
            amount=amount,
            kind=kind,
            description=description,
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def net_for_source(self, source_type: str, source_id: str) -> dict[str, Decimal]:
        stmt = (
            select(LedgerEntry.wallet_id, func.sum(LedgerEntry.amount))
            .where(LedgerEntry.source_type == source_type, LedgerEntry.source_id == source_id)
            .group_by(LedgerEntry.wallet_id)
        )
        result = await self.session.execute(stmt)
        totals: dict[str, Decimal] = {}
        for wallet_id, total in result.all():
            amount = Decimal(str(total or 0)).quantize(Decimal("0.01"))
            if amount != 0:
                totals[wallet_id] = amount
        return totals

    async def sum_for_wallet(self, wallet_id: str) -> Decimal:
        stmt = select(func.coalesce(func.sum(LedgerEntry.amount), 0)).where(LedgerEntry.wallet_id == wallet_id)
        total = (await self.session.execute(stmt)).scalar_one()
        return Decimal(str(total)).quantize(Decimal("0.01"))

    async def list_for_wallet(self, wallet_id: str, limit: int | None = None) -> list[LedgerEntry]:
        stmt = (
            select(LedgerEntry)
            .where(LedgerEntry.wallet_id == wallet_id)
            .order_by(desc(LedgerEntry.id))
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_for_wallet(self, wallet_id: str) -> None:
        entries = await self.list_for_wallet(wallet_id)
        for entry in entries:
            await self.session.delete(entry)
        await self.session.flush()
