"""SQLAlchemy implementation for people"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Payment, Person


def _money(value: Any) -> Decimal:
    return Decimal(str(value or 0)).quantize(Decimal("0.01"))


class SqlPersonRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_person(self, person_id: str) -> Person | None:
        stmt = select(Person).where(Person.id == person_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_people(self) -> list[Person]:
        stmt = select(Person).order_by(Person.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def totals_by_person(self) -> dict[str, tuple[Decimal, Decimal]]:
        """Map person id to (total sent, total received) over payment amounts."""
        stmt = (
            select(Payment.person_id, Payment.type, func.sum(Payment.amount))
            .group_by(Payment.person_id, Payment.type)
        )
        totals: dict[str, tuple[Decimal, Decimal]] = {}
        for person_id, kind, total in (await self.session.execute(stmt)).all():
            given, received = totals.get(person_id, (Decimal("0.00"), Decimal("0.00")))
            if kind == "send":
                given += _money(total)
            else:
                received += _money(total)
            totals[person_id] = (given, received)
        return totals

    async def list_payments(self, person_id: str) -> list[Payment]:
        stmt = select(Payment).where(Payment.person_id == person_id).order_by(desc(Payment.date))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_person(self, **fields: Any) -> Person:
        person = Person(**fields)
        self.session.add(person)
        await self.session.flush()
        return person

    async def update_person(self, person: Person, **fields: Any) -> Person:
        for name, value in fields.items():
            setattr(person, name, value)
        await self.session.flush()
        return person

    async def delete_person(self, person: Person) -> None:
        await self.session.delete(person)
        await self.session.flush()

    async def has_payments(self, person_id: str) -> bool:
        stmt = select(Payment.id).where(Payment.person_id == person_id).limit(1)
        return (await self.session.execute(stmt)).first() is not None
