"""SQLAlchemy implementation for wallets"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Expense, Income, Payment, Transfer, Wallet
from portfolio_finance.modules.common.exceptions import NotFoundError


class SqlWalletRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_wallet(self, wallet_id: str) -> Wallet | None:
        stmt = (
            select(Wallet)
            .where(Wallet.id == wallet_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_wallets(self) -> list[Wallet]:
        stmt = select(Wallet).order_by(Wallet.name).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_wallet(self, **fields: Any) -> Wallet:
        wallet = Wallet(balance=Decimal("0"), **fields)
        self.session.add(wallet)
        await self.session.flush()
        return wallet

    async def update_wallet(self, wallet_id: str, **fields: Any) -> Wallet:
        wallet = await self.get_wallet(wallet_id)
        if wallet is None:
            raise NotFoundError("Wallet", wallet_id)
        for name, value in fields.items():
            setattr(wallet, name, value)
        await self.session.flush()
        return wallet

    async def delete_wallet(self, wallet: Wallet) -> None:
        await self.session.delete(wallet)
        await self.session.flush()

    async def increment_balance(self, wallet_id: str, delta: Decimal) -> Wallet:
        """Atomically add ``delta`` to the stored balance."""
        stmt = (
            update(Wallet)
            .where(Wallet.id == wallet_id)
            .values(balance=Wallet.balance + delta)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError("Wallet", wallet_id)
        wallet = await self.get_wallet(wallet_id)
        if wallet is None:
            raise NotFoundError("Wallet", wallet_id)
        return wallet

    async def is_referenced(self, wallet_id: str) -> bool:
        checks = (
            select(Expense.id).where(Expense.wallet_id == wallet_id),
            select(Income.id).where(Income.wallet_id == wallet_id),
            select(Payment.id).where(Payment.wallet_id == wallet_id),
            select(Transfer.id).where(
                or_(Transfer.from_wallet_id == wallet_id, Transfer.to_wallet_id == wallet_id)
            ),
        )
        for stmt in checks:
            if (await self.session.execute(stmt.limit(1))).first() is not None:
                return True
        return False

    async def total_balance(self) -> Decimal:
        stmt = select(func.coalesce(func.sum(Wallet.balance), 0))
        total = (await self.session.execute(stmt)).scalar_one()
        return Decimal(str(total)).quantize(Decimal("0.01"))
