from decimal import Decimal

import pytest

from portfolio_finance.modules.common.exceptions import LedgerConsistencyError, NotFoundError
from portfolio_finance.modules.ledger import LedgerService, WalletEffect, expense_effects, payment_effects
from portfolio_finance.modules.ledger.effects import net_by_wallet, transfer_effects

pytestmark = pytest.mark.anyio


def test_pending_records_have_no_effect():
    assert expense_effects(wallet_id="w", status="Pending", paid_amount=Decimal("0")) == ()
    assert payment_effects(wallet_id="w", status="Pending", type="send", paid_amount=Decimal("5")) == ()
    assert expense_effects(wallet_id=None, status="Paid", paid_amount=Decimal("5")) == ()


def test_payment_direction_sets_the_sign():
    received = payment_effects(wallet_id="w", status="Completed", type="receive", paid_amount=Decimal("20"))
    sent = payment_effects(wallet_id="w", status="Partial", type="send", paid_amount=Decimal("5"))
    assert received == (WalletEffect("w", Decimal("20")),)
    assert sent == (WalletEffect("w", Decimal("-5")),)


def test_transfer_effects_net_to_zero_per_pair():
    effects = transfer_effects(from_wallet_id="a", to_wallet_id="b", amount=Decimal("300"))
    assert net_by_wallet(effects) == {"a": Decimal("-300"), "b": Decimal("300")}


async def test_apply_then_revert_restores_balance(session, make_wallet, balance_of):
    wallet_id = await make_wallet(balance="500")
    ledger = LedgerService.with_session(session)
    effects = (WalletEffect(wallet_id, Decimal("-120.50")),)

    await ledger.apply("expense", "e-1", effects)
    assert await balance_of(wallet_id) == Decimal("379.50")
    assert await ledger.outstanding("expense", "e-1") == {wallet_id: Decimal("-120.50")}

    await ledger.revert("expense", "e-1", effects)
    assert await balance_of(wallet_id) == Decimal("500.00")
    assert await ledger.outstanding("expense", "e-1") == {}


async def test_double_revert_is_a_consistency_violation(session, make_wallet, balance_of):
    wallet_id = await make_wallet(balance="100")
    ledger = LedgerService.with_session(session)
    effects = (WalletEffect(wallet_id, Decimal("-40")),)
    await ledger.apply("expense", "e-2", effects)
    await ledger.revert("expense", "e-2", effects)

    with pytest.raises(LedgerConsistencyError):
        await ledger.revert("expense", "e-2", effects)
    assert await balance_of(wallet_id) == Decimal("100.00")


async def test_double_apply_is_a_consistency_violation(session, make_wallet):
    wallet_id = await make_wallet(balance="100")
    ledger = LedgerService.with_session(session)
    effects = (WalletEffect(wallet_id, Decimal("10")),)
    await ledger.apply("income", "i-1", effects)

    with pytest.raises(LedgerConsistencyError):
        await ledger.apply("income", "i-1", effects)


async def test_revert_must_match_what_was_applied(session, make_wallet):
    wallet_id = await make_wallet(balance="100")
    ledger = LedgerService.with_session(session)
    await ledger.apply("expense", "e-3", (WalletEffect(wallet_id, Decimal("-30")),))

    with pytest.raises(LedgerConsistencyError):
        await ledger.revert("expense", "e-3", (WalletEffect(wallet_id, Decimal("-20")),))


async def test_reconcile_matches_ledger_and_reports_drift(session, make_wallet):
    wallet_id = await make_wallet(balance="250")
    ledger = LedgerService.with_session(session)

    report = await ledger.reconcile(wallet_id)
    assert report.consistent
    assert report.ledger_balance == Decimal("250.00")

    # A write that bypasses the ledger shows up as drift.
    await ledger.wallets.increment_balance(wallet_id, Decimal("5"))
    report = await ledger.reconcile(wallet_id)
    assert not report.consistent
    assert report.drift == Decimal("5.00")


async def test_reconcile_unknown_wallet(session):
    with pytest.raises(NotFoundError):
        await LedgerService.with_session(session).reconcile("missing")
