from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from portfolio_finance.db.models import Income
from portfolio_finance.infrastructure.database.repositories import SqlWalletRepository
from portfolio_finance.modules.categories import CategoryService
from portfolio_finance.modules.common.exceptions import ConflictError, NotFoundError
from portfolio_finance.modules.expenses import ExpenseService
from portfolio_finance.modules.income import IncomeService
from portfolio_finance.modules.payments import PaymentService
from portfolio_finance.modules.people import PersonService
from portfolio_finance.modules.wallets import WalletService

pytestmark = pytest.mark.anyio


async def test_person_with_payments_cannot_be_deleted(session, cache, make_wallet):
    people = PersonService.with_session(session, cache)
    payments = PaymentService.with_session(session, cache)
    wallet_id = await make_wallet(balance="100")
    person = await people.create({"name": "Sara", "email": "Sara@Example.com"})
    payment = await payments.create(
        {"person_id": person.id, "type": "send", "amount": "30", "paid_amount": "30", "wallet_id": wallet_id}
    )
    assert person.email == "sara@example.com"

    with pytest.raises(ConflictError):
        await people.delete(person.id)

    await payments.delete(payment.id)
    await people.delete(person.id)
    with pytest.raises(NotFoundError):
        await people.get_person(person.id)


async def test_person_balance_is_received_minus_given(session, cache, make_wallet):
    people = PersonService.with_session(session, cache)
    payments = PaymentService.with_session(session, cache)
    wallet_id = await make_wallet(balance="1000")
    person = await people.create({"name": "Bilal", "type": "Business"})
    for kind, amount in (("send", "500"), ("receive", "200"), ("send", "50")):
        await payments.create({"person_id": person.id, "type": kind, "amount": amount, "wallet_id": wallet_id})

    balance = await people.get_balance(person.id)
    assert balance.total_given == Decimal("550.00")
    assert balance.total_received == Decimal("200.00")
    assert balance.balance == Decimal("-350.00")

    [listed] = await people.list_people()
    assert listed.balance == balance.balance


async def test_wallet_in_use_cannot_be_deleted(session, cache, make_wallet):
    wallets = WalletService.with_session(session, cache)
    wallet_id = await make_wallet(balance="100")

    with pytest.raises(ConflictError):
        await wallets.delete(wallet_id)


async def test_unused_wallet_can_be_deleted(session, cache):
    wallets = WalletService.with_session(session, cache)
    wallet = await wallets.create({"name": "Spare", "type": "Bank"})

    await wallets.delete(wallet.id)
    assert await wallets.list_wallets() == []


async def test_deleting_a_category_detaches_expenses(session, cache, make_wallet):
    categories = CategoryService.with_session(session, cache)
    expenses = ExpenseService.with_session(session, cache)
    wallet_id = await make_wallet(balance="100")
    category = await categories.create({"name": "Food", "type": "expense"})
    expense = await expenses.create(
        {"title": "Lunch", "category": "Food", "category_id": category.id, "amount": "10", "wallet_id": wallet_id}
    )

    await categories.delete(category.id)

    assert (await expenses.get_expense(expense.id)).category_id is None
    assert await categories.list_categories() == []


async def test_unknown_category_is_rejected(session, cache, make_wallet):
    wallet_id = await make_wallet(balance="100")
    expenses = ExpenseService.with_session(session, cache)
    income = IncomeService.with_session(session, cache)

    with pytest.raises(NotFoundError):
        await expenses.create(
            {"title": "Lunch", "category": "Food", "category_id": "ghost", "amount": "10", "wallet_id": wallet_id}
        )
    with pytest.raises(NotFoundError):
        await income.create({"source": "Gift", "amount": "10", "category_id": "ghost", "wallet_id": wallet_id})

    expense = await expenses.create({"title": "Lunch", "category": "Food", "amount": "10", "wallet_id": wallet_id})
    with pytest.raises(NotFoundError):
        await expenses.update(expense.id, {"category_id": "ghost"})


async def test_sqlite_enforces_foreign_keys(session, make_wallet):
    wallet_id = await make_wallet()
    assert (await session.execute(text("PRAGMA foreign_keys"))).scalar() == 1

    session.add(Income(source="Gift", amount=Decimal("5"), wallet_id=wallet_id, category_id="ghost", date=date(2026, 1, 1)))
    with pytest.raises(IntegrityError):
        await session.flush()


async def test_incrementing_a_missing_wallet_is_not_found(session):
    with pytest.raises(NotFoundError):
        await SqlWalletRepository(session).increment_balance("missing", Decimal("1"))
