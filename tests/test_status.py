from decimal import Decimal

import pytest

from portfolio_finance.modules.common.exceptions import ValidationError
from portfolio_finance.modules.common.status import (
    ExpenseStatus,
    PaymentStatus,
    Settlement,
    derive_status,
    expense_status,
    is_ledger_qualifying,
    payment_status,
)


@pytest.mark.parametrize(
    "amount, paid, expected",
    [
        ("100", "100", Settlement.SETTLED),
        ("100", "99.999", Settlement.PARTIAL),
        ("100", "0", Settlement.PENDING),
        ("100", "0.01", Settlement.PARTIAL),
        ("100", "150", Settlement.SETTLED),
        ("0", "0", Settlement.SETTLED),
    ],
)
def test_derive_status_boundaries(amount, paid, expected):
    assert derive_status(Decimal(amount), Decimal(paid)) is expected


def test_negative_amounts_are_rejected():
    with pytest.raises(ValidationError):
        derive_status(Decimal("-1"), Decimal("0"))
    with pytest.raises(ValidationError):
        derive_status(Decimal("10"), Decimal("-1"))


def test_entity_specific_labels():
    assert expense_status(Decimal("10"), Decimal("10")) is ExpenseStatus.PAID
    assert expense_status(Decimal("10"), Decimal("0")) is ExpenseStatus.PENDING
    assert payment_status(Decimal("10"), Decimal("10")) is PaymentStatus.COMPLETED
    assert payment_status(Decimal("10"), Decimal("4")) is PaymentStatus.PARTIAL


def test_only_settled_or_partial_statuses_move_money():
    assert is_ledger_qualifying("Paid")
    assert is_ledger_qualifying("Partial")
    assert is_ledger_qualifying("Completed")
    assert not is_ledger_qualifying("Pending")
    assert not is_ledger_qualifying("Overdue")
    assert not is_ledger_qualifying(None)
