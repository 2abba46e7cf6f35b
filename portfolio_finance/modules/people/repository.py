"""Repository protocol for people."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol, Sequence

from portfolio_finance.db.models import Payment as PaymentModel
from portfolio_finance.db.models import Person as PersonModel


class PersonRepository(Protocol):
    async def get_person(self, person_id: str) -> PersonModel | None:
        ...

    async def list_people(self) -> Sequence[PersonModel]:
        ...

    async def totals_by_person(self) -> dict[str, tuple[Decimal, Decimal]]:
        ...

    async def list_payments(self, person_id: str) -> Sequence[PaymentModel]:
        ...

    async def create_person(self, **fields: Any) -> PersonModel:
        ...

    async def update_person(self, person: PersonModel, **fields: Any) -> PersonModel:
        ...

    async def delete_person(self, person: PersonModel) -> None:
        ...

    async def has_payments(self, person_id: str) -> bool:
        ...
