"""Repository protocol for payments."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from portfolio_finance.db.models import Payment as PaymentModel


class PaymentRepository(Protocol):
    async def get_payment(self, payment_id: str) -> PaymentModel | None:
        ...

    async def list_payments(self, person_id: str | None = None) -> Sequence[PaymentModel]:
        ...

    async def create_payment(self, **fields: Any) -> PaymentModel:
        ...

    async def update_payment(self, payment: PaymentModel, **fields: Any) -> PaymentModel:
        ...

    async def delete_payment(self, payment: PaymentModel) -> None:
        ...
