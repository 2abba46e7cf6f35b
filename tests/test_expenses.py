from decimal import Decimal

import pytest

from portfolio_finance.modules.common.exceptions import NotFoundError, ValidationError
from portfolio_finance.modules.expenses import ExpenseService
from portfolio_finance.modules.notifications import NotificationService

pytestmark = pytest.mark.anyio


@pytest.fixture
def expenses(session, cache):
    return ExpenseService.with_session(session, cache)


def _expense(wallet_id, **overrides):
    data = {"title": "Groceries", "category": "Food", "amount": "100", "wallet_id": wallet_id}
    data.update(overrides)
    return data


async def test_blank_paid_amount_settles_in_full(expenses, make_wallet, balance_of):
    wallet_id = await make_wallet(balance="1000")
    expense = await expenses.create(_expense(wallet_id, paidAmount=""))

    assert expense.status == "Paid"
    assert expense.paid_amount == Decimal("100.00")
    assert [row.notes for row in expense.payment_history] == ["Initial payment"]
    assert await balance_of(wallet_id) == Decimal("900.00")


async def test_pending_expense_does_not_touch_the_wallet(expenses, make_wallet, balance_of):
    wallet_id = await make_wallet(balance="1000")
    expense = await expenses.create(_expense(wallet_id, paid_amount="0"))

    assert expense.status == "Pending"
    assert expense.payment_history == []
    assert await balance_of(wallet_id) == Decimal("1000.00")


async def test_lowering_paid_amount_credits_the_difference(expenses, make_wallet, balance_of):
    wallet_id = await make_wallet(balance="1000")
    expense = await expenses.create(_expense(wallet_id, paid_amount="100"))

    updated = await expenses.update(expense.id, {"paid_amount": "50"})

    assert updated.status == "Partial"
    assert await balance_of(wallet_id) == Decimal("950.00")


async def test_moving_wallets_moves_the_applied_amount(expenses, make_wallet, balance_of):
    wallet_a = await make_wallet("A", balance="500")
    wallet_b = await make_wallet("B", balance="500")
    expense = await expenses.create(_expense(wallet_a))

    await expenses.update(expense.id, {"wallet_id": wallet_b})

    assert await balance_of(wallet_a) == Decimal("500.00")
    assert await balance_of(wallet_b) == Decimal("400.00")


async def test_partial_edit_keeps_unsubmitted_fields(expenses, make_wallet):
    wallet_id = await make_wallet(balance="500")
    expense = await expenses.create(_expense(wallet_id, paid_amount="40", notes="weekly shop"))

    updated = await expenses.update(expense.id, {"title": "Groceries (Sat)"})

    assert updated.title == "Groceries (Sat)"
    assert updated.paid_amount == Decimal("40.00")
    assert updated.notes == "weekly shop"
    assert updated.wallet_id == wallet_id


async def test_delete_restores_the_wallet(expenses, make_wallet, balance_of):
    wallet_id = await make_wallet(balance="300")
    expense = await expenses.create(_expense(wallet_id, amount="120"))

    await expenses.delete(expense.id)

    assert await balance_of(wallet_id) == Decimal("300.00")
    with pytest.raises(NotFoundError):
        await expenses.get_expense(expense.id)


async def test_record_payment_moves_only_the_new_amount(expenses, make_wallet, balance_of):
    wallet_id = await make_wallet(balance="1000")
    expense = await expenses.create(_expense(wallet_id, amount="300", paid_amount="100"))

    paid = await expenses.record_payment(expense.id, {"amount": "150", "method": "Bank"})

    assert paid.status == "Partial"
    assert paid.paid_amount == Decimal("250.00")
    assert paid.amount_due == Decimal("50.00")
    assert [row.amount for row in paid.payment_history] == [Decimal("100.00"), Decimal("150.00")]
    assert await balance_of(wallet_id) == Decimal("750.00")

    settled = await expenses.record_payment(expense.id, {"amount": "50"})
    assert settled.status == "Paid"
    assert await balance_of(wallet_id) == Decimal("700.00")


async def test_record_payment_bounds(expenses, make_wallet, balance_of):
    wallet_id = await make_wallet(balance="1000")
    other_wallet = await make_wallet("Bank", balance="10")
    expense = await expenses.create(_expense(wallet_id, amount="100", paid_amount="60"))

    with pytest.raises(ValidationError):
        await expenses.record_payment(expense.id, {"amount": "40.01"})
    with pytest.raises(ValidationError):
        await expenses.record_payment(expense.id, {"amount": "0"})
    with pytest.raises(ValidationError):
        await expenses.record_payment(expense.id, {})
    with pytest.raises(ValidationError):
        await expenses.record_payment(expense.id, {"amount": "10", "wallet_id": other_wallet})

    assert await balance_of(wallet_id) == Decimal("940.00")


async def test_unknown_wallet_is_rejected(expenses):
    with pytest.raises(NotFoundError):
        await expenses.create(_expense("no-such-wallet"))


async def test_recurring_expense_needs_a_frequency(expenses, make_wallet):
    wallet_id = await make_wallet()
    with pytest.raises(ValidationError):
        await expenses.create(_expense(wallet_id, paid_amount="0", is_recurring="on"))

    expense = await expenses.create(
        _expense(wallet_id, paid_amount="0", isRecurring="on", recurringFrequency="Monthly", nextDueDate="2026-11-01")
    )
    assert expense.is_recurring
    assert expense.recurring_frequency == "Monthly"


async def test_create_notifies(session, cache, make_wallet):
    notifier = NotificationService.with_session(session)
    service = ExpenseService.with_session(session, cache, notifier)
    wallet_id = await make_wallet(balance="100")

    await service.create(_expense(wallet_id, amount="10"))

    titles = [row.title for row in await notifier.list_recent()]
    assert "Expense added" in titles
    assert await notifier.count_unread() >= 1
