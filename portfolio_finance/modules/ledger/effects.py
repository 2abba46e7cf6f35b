"""Pure rules mapping a money movement's state to its wallet effects."""

from __future__ import annotations

from decimal import Decimal

from portfolio_finance.modules.common.status import is_ledger_qualifying

from .models import WalletEffect

Effects = tuple[WalletEffect, ...]


def _nonzero(*effects: WalletEffect) -> Effects:
    return tuple(effect for effect in effects if effect.amount != 0)


def expense_effects(*, wallet_id: str | None, status: str, paid_amount: Decimal) -> Effects:
    if wallet_id is None or not is_ledger_qualifying(status):
        return ()
    return _nonzero(WalletEffect(wallet_id, -paid_amount))


def income_effects(*, wallet_id: str | None, amount: Decimal) -> Effects:
    if wallet_id is None:
        return ()
    return _nonzero(WalletEffect(wallet_id, amount))


def payment_effects(
    *,
    wallet_id: str | None,
    status: str,
    type: str,
    paid_amount: Decimal,
) -> Effects:
    if wallet_id is None or not is_ledger_qualifying(status):
        return ()
    signed = paid_amount if type == "receive" else -paid_amount
    return _nonzero(WalletEffect(wallet_id, signed))


def transfer_effects(*, from_wallet_id: str, to_wallet_id: str, amount: Decimal) -> Effects:
    return _nonzero(
        WalletEffect(from_wallet_id, -amount),
        WalletEffect(to_wallet_id, amount),
    )


def net_by_wallet(effects: Effects) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = {}
    for effect in effects:
        totals[effect.wallet_id] = totals.get(effect.wallet_id, Decimal("0")) + effect.amount
    return {wallet_id: total for wallet_id, total in totals.items() if total != 0}
