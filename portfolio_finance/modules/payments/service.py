"""Payment mutation helpers for money sent to or received from people."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.db.models import Payment as PaymentModel
from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.infrastructure.database.repositories.payment_repository import SqlPaymentRepository
from portfolio_finance.infrastructure.database.repositories.person_repository import SqlPersonRepository
from portfolio_finance.modules.common.exceptions import NotFoundError
from portfolio_finance.modules.common.parsing import client_id
from portfolio_finance.modules.common.status import payment_status
from portfolio_finance.modules.ledger import LedgerService, payment_effects
from portfolio_finance.modules.ledger.effects import Effects
from portfolio_finance.modules.notifications import NotificationService
from portfolio_finance.modules.people.repository import PersonRepository

from .models import PaymentInput, PaymentSnapshot
from .repository import PaymentRepository

logger = logging.getLogger(__name__)

SOURCE_TYPE = "payment"


def _effects(model: PaymentModel) -> Effects:
    return payment_effects(
        wallet_id=model.wallet_id,
        status=model.status,
        type=model.type,
        paid_amount=Decimal(model.paid_amount or 0),
    )


def _describe(model: PaymentModel) -> str:
    direction = "received" if model.type == "receive" else "sent"
    return f"Payment {direction}: {model.amount}"


@dataclass(slots=True)
class PaymentService:
    repository: PaymentRepository
    people: PersonRepository
    ledger: LedgerService
    cache: FinanceCache
    notifier: NotificationService

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        cache: FinanceCache,
        notifier: NotificationService | None = None,
    ) -> "PaymentService":
        return cls(
            SqlPaymentRepository(session),
            SqlPersonRepository(session),
            LedgerService.with_session(session),
            cache.for_session(session),
            notifier or NotificationService.with_session(session),
        )

    async def list_payments(self, person_id: str | None = None) -> list[PaymentSnapshot]:
        rows = await self.repository.list_payments(person_id)
        return [self._to_snapshot(row) for row in rows]

    async def get_payment(self, payment_id: str) -> PaymentSnapshot:
        return self._to_snapshot(await self._load(payment_id))

    async def create(self, data) -> PaymentSnapshot:
        payload = PaymentInput.from_mapping(data)
        await self._check_references(payload)
        status = payment_status(payload.amount, payload.paid_amount)
        payment = await self.repository.create_payment(
            status=status.value, **self._fields(payload), **client_id(data)
        )
        await self.ledger.apply(SOURCE_TYPE, payment.id, _effects(payment), _describe(payment))
        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info("Payment %s created (%s %s %s)", payment.id, payment.type, payment.amount, status.value)

        await self.notifier.notify(
            "Payment recorded",
            f"{_describe(payment)} ({status.value})",
            link=f"/admin/finance/people/{payment.person_id}",
        )
        return self._to_snapshot(payment)

    async def update(self, payment_id: str, data) -> PaymentSnapshot:
        payment = await self._load(payment_id)
        payload = PaymentInput.from_mapping(data, current=payment)
        await self._check_references(payload)

        await self.ledger.revert(SOURCE_TYPE, payment.id, _effects(payment), f"Edited: {_describe(payment)}")
        status = payment_status(payload.amount, payload.paid_amount)
        payment = await self.repository.update_payment(payment, status=status.value, **self._fields(payload))
        await self.ledger.apply(SOURCE_TYPE, payment.id, _effects(payment), _describe(payment))

        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info("Payment %s updated (%s %s)", payment.id, payment.amount, status.value)
        return self._to_snapshot(payment)

    async def delete(self, payment_id: str) -> PaymentSnapshot:
        payment = await self._load(payment_id)
        snapshot = self._to_snapshot(payment)
        await self.ledger.revert(SOURCE_TYPE, payment.id, _effects(payment), f"Deleted: {_describe(payment)}")
        await self.repository.delete_payment(payment)
        await self.cache.invalidate_for([SOURCE_TYPE])
        logger.info("Payment %s deleted", payment_id)
        return snapshot

    async def _check_references(self, payload: PaymentInput) -> None:
        if await self.people.get_person(payload.person_id) is None:
            raise NotFoundError("Person", payload.person_id)
        await self.ledger.require_wallet(payload.wallet_id)

    async def _load(self, payment_id: str) -> PaymentModel:
        payment = await self.repository.get_payment(payment_id)
        if payment is None:
            raise NotFoundError("Payment", payment_id)
        return payment

    @staticmethod
    def _fields(payload: PaymentInput) -> dict:
        return {
            "person_id": payload.person_id,
            "type": payload.type,
            "amount": payload.amount,
            "paid_amount": payload.paid_amount,
            "method": payload.method,
            "date": payload.date,
            "wallet_id": payload.wallet_id,
            "end_date": payload.end_date,
            "notes": payload.notes,
        }

    @staticmethod
    def _to_snapshot(model: PaymentModel) -> PaymentSnapshot:
        return PaymentSnapshot(
            id=model.id,
            person_id=model.person_id,
            type=model.type,
            amount=Decimal(model.amount),
            paid_amount=Decimal(model.paid_amount or 0),
            status=model.status,
            method=model.method,
            date=model.date,
            wallet_id=model.wallet_id,
            end_date=model.end_date,
            notes=model.notes,
            created_at=model.created_at,
        )
