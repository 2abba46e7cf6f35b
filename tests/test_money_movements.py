from decimal import Decimal

import pytest

from portfolio_finance.modules.common.exceptions import NotFoundError, ValidationError
from portfolio_finance.modules.expenses import ExpenseService
from portfolio_finance.modules.income import IncomeService
from portfolio_finance.modules.ledger import LedgerService
from portfolio_finance.modules.payments import PaymentService
from portfolio_finance.modules.people import PersonService
from portfolio_finance.modules.transfers import TransferService

pytestmark = pytest.mark.anyio


@pytest.fixture
def income(session, cache):
    return IncomeService.with_session(session, cache)


@pytest.fixture
def payments(session, cache):
    return PaymentService.with_session(session, cache)


@pytest.fixture
def transfers(session, cache):
    return TransferService.with_session(session, cache)


@pytest.fixture
async def person_id(session, cache):
    person = await PersonService.with_session(session, cache).create({"name": "Ali", "type": "Friend"})
    return person.id


async def test_income_credits_and_follows_edits(income, make_wallet, balance_of):
    wallet_id = await make_wallet()
    record = await income.create({"source": "Salary", "amount": "2500", "wallet": wallet_id})
    assert await balance_of(wallet_id) == Decimal("2500.00")

    await income.update(record.id, {"amount": "2000"})
    assert await balance_of(wallet_id) == Decimal("2000.00")

    await income.delete(record.id)
    assert await balance_of(wallet_id) == Decimal("0.00")


async def test_income_requires_a_wallet(income):
    with pytest.raises(ValidationError):
        await income.create({"source": "Salary", "amount": "10"})


async def test_deleting_a_received_payment_debits_the_wallet(payments, person_id, make_wallet, balance_of):
    wallet_id = await make_wallet(balance="1000")
    payment = await payments.create(
        {"person_id": person_id, "type": "receive", "amount": "200", "paid_amount": "200", "wallet_id": wallet_id}
    )
    assert payment.status == "Completed"
    assert await balance_of(wallet_id) == Decimal("1200.00")

    await payments.delete(payment.id)
    assert await balance_of(wallet_id) == Decimal("1000.00")


async def test_pending_payment_moves_nothing_until_paid(payments, person_id, make_wallet, balance_of):
    wallet_id = await make_wallet(balance="1000")
    payment = await payments.create({"person": person_id, "type": "send", "amount": "300", "wallet_id": wallet_id})
    assert payment.status == "Pending"
    assert await balance_of(wallet_id) == Decimal("1000.00")

    updated = await payments.update(payment.id, {"paidAmount": "100"})
    assert updated.status == "Partial"
    assert updated.amount_due == Decimal("200.00")
    assert await balance_of(wallet_id) == Decimal("900.00")


async def test_payment_for_unknown_person(payments, make_wallet):
    wallet_id = await make_wallet()
    with pytest.raises(NotFoundError):
        await payments.create({"person_id": "nobody", "type": "send", "amount": "5", "wallet_id": wallet_id})


async def test_transfer_moves_between_wallets(transfers, make_wallet, balance_of):
    source = await make_wallet("Bank", balance="1000")
    target = await make_wallet("Cash")

    transfer = await transfers.create({"fromWallet": source, "toWallet": target, "amount": "300"})
    assert await balance_of(source) == Decimal("700.00")
    assert await balance_of(target) == Decimal("300.00")

    await transfers.update(transfer.id, {"amount": "100"})
    assert await balance_of(source) == Decimal("900.00")
    assert await balance_of(target) == Decimal("100.00")

    await transfers.delete(transfer.id)
    assert await balance_of(source) == Decimal("1000.00")
    assert await balance_of(target) == Decimal("0.00")


@pytest.mark.parametrize("amount", ["0", "-5"])
async def test_transfer_rejects_non_positive_amounts(transfers, make_wallet, amount):
    source = await make_wallet("Bank", balance="10")
    target = await make_wallet("Cash")
    with pytest.raises(ValidationError):
        await transfers.create({"from_wallet_id": source, "to_wallet_id": target, "amount": amount})


async def test_transfer_rejects_same_wallet(transfers, make_wallet):
    wallet_id = await make_wallet(balance="10")
    with pytest.raises(ValidationError, match="same wallet"):
        await transfers.create({"from_wallet_id": wallet_id, "to_wallet_id": wallet_id, "amount": "5"})


async def test_balance_equals_sum_of_applied_effects(session, cache, person_id, make_wallet, balance_of):
    """Interleaved edits across every movement type still fold to the ledger sum."""
    wallet_a = await make_wallet("A", balance="1000")
    wallet_b = await make_wallet("B", balance="500")
    expenses = ExpenseService.with_session(session, cache)
    income = IncomeService.with_session(session, cache)
    payments = PaymentService.with_session(session, cache)
    transfers = TransferService.with_session(session, cache)

    rent = await expenses.create({"title": "Rent", "category": "Home", "amount": "400", "wallet_id": wallet_a})
    bonus = await income.create({"source": "Bonus", "amount": "150", "wallet_id": wallet_b})
    loan = await payments.create(
        {"person_id": person_id, "type": "send", "amount": "200", "paid_amount": "50", "wallet_id": wallet_a}
    )
    move = await transfers.create({"from_wallet_id": wallet_b, "to_wallet_id": wallet_a, "amount": "250"})

    await expenses.update(rent.id, {"paid_amount": "0"})
    await payments.update(loan.id, {"paid_amount": "200", "wallet_id": wallet_b})
    await expenses.update(rent.id, {"paid_amount": "400", "wallet_id": wallet_b})
    await income.delete(bonus.id)
    await transfers.update(move.id, {"amount": "50"})

    # A: 1000 + 50 (transfer in); B: 500 - 200 (loan) - 400 (rent) - 50 (transfer out)
    assert await balance_of(wallet_a) == Decimal("1050.00")
    assert await balance_of(wallet_b) == Decimal("-150.00")

    ledger = LedgerService.with_session(session)
    for wallet_id in (wallet_a, wallet_b):
        assert (await ledger.reconcile(wallet_id)).consistent
