"""Person service. People carry no wallet effect; their balance is derived from payments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Person as PersonModel
from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.infrastructure.database.repositories.person_repository import SqlPersonRepository
from portfolio_finance.modules.common.exceptions import ConflictError, NotFoundError
from portfolio_finance.modules.common.parsing import client_id

from .models import PersonBalance, PersonInput, PersonSnapshot
from .repository import PersonRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


@dataclass(slots=True)
class PersonService:
    repository: PersonRepository
    cache: FinanceCache

    @classmethod
    def with_session(cls, session: AsyncSession, cache: FinanceCache) -> "PersonService":
        return cls(SqlPersonRepository(session), cache.for_session(session))

    async def list_people(self) -> list[PersonBalance]:
        people = await self.repository.list_people()
        totals = await self.repository.totals_by_person()
        balances = []
        for person in people:
            given, received = totals.get(person.id, (ZERO, ZERO))
            balances.append(PersonBalance(self._to_snapshot(person), given, received))
        return balances

    async def get_person(self, person_id: str) -> PersonSnapshot:
        return self._to_snapshot(await self._load(person_id))

    async def get_balance(self, person_id: str) -> PersonBalance:
        person = await self._load(person_id)
        given = received = ZERO
        for payment in await self.repository.list_payments(person_id):
            if payment.type == "send":
                given += Decimal(payment.amount)
            else:
                received += Decimal(payment.amount)
        return PersonBalance(self._to_snapshot(person), given, received)

    async def require(self, person_id: str) -> None:
        await self._load(person_id)

    async def create(self, data) -> PersonSnapshot:
        payload = PersonInput.from_mapping(data)
        person = await self.repository.create_person(**self._fields(payload), **client_id(data))
        await self.cache.invalidate_for(["person"])
        logger.info("Person %s created (%s)", person.id, person.name)
        return self._to_snapshot(person)

    async def update(self, person_id: str, data) -> PersonSnapshot:
        person = await self._load(person_id)
        payload = PersonInput.from_mapping(data, current=person)
        person = await self.repository.update_person(person, **self._fields(payload))
        await self.cache.invalidate_for(["person"])
        return self._to_snapshot(person)

    async def delete(self, person_id: str) -> PersonSnapshot:
        person = await self._load(person_id)
        if await self.repository.has_payments(person_id):
            raise ConflictError(f"{person.name} still has payments; delete them first")
        snapshot = self._to_snapshot(person)
        await self.repository.delete_person(person)
        await self.cache.invalidate_for(["person"])
        logger.info("Person %s deleted", person_id)
        return snapshot

    async def _load(self, person_id: str) -> PersonModel:
        person = await self.repository.get_person(person_id)
        if person is None:
            raise NotFoundError("Person", person_id)
        return person

    @staticmethod
    def _fields(payload: PersonInput) -> dict:
        return {
            "name": payload.name,
            "type": payload.type,
            "phone": payload.phone,
            "email": payload.email,
            "address": payload.address,
            "notes": payload.notes,
        }

    @staticmethod
    def _to_snapshot(model: PersonModel) -> PersonSnapshot:
        return PersonSnapshot(
            id=model.id,
            name=model.name,
            type=model.type,
            phone=model.phone,
            email=model.email,
            address=model.address,
            notes=model.notes,
            created_at=model.created_at,
        )
