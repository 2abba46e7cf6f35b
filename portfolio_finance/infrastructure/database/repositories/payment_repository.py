"""SQLAlchemy implementation for payments"""

from __future__ import annotations

from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Payment


class SqlPaymentRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_payment(self, payment_id: str) -> Payment | None:
        stmt = select(Payment).where(Payment.id == payment_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_payments(self, person_id: str | None = None) -> list[Payment]:
        stmt = select(Payment)
        if person_id is not None:
            stmt = stmt.where(Payment.person_id == person_id)
        stmt = stmt.order_by(desc(Payment.date), desc(Payment.created_at))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_payment(self, **fields: Any) -> Payment:
        payment = Payment(**fields)
        self.session.add(payment)
        await self.session.flush()
        return payment

    async def update_payment(self, payment: Payment, **fields: Any) -> Payment:
        for name, value in fields.items():
            setattr(payment, name, value)
        await self.session.flush()
        return payment

    async def delete_payment(self, payment: Payment) -> None:
        await self.session.delete(payment)
        await self.session.flush()
