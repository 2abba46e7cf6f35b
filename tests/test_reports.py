import datetime as dt
from decimal import Decimal

import pytest

from portfolio_finance.modules.expenses import ExpenseService
from portfolio_finance.modules.payments import PaymentService
from portfolio_finance.modules.people import PersonService
from portfolio_finance.modules.reports import ReportService
from portfolio_finance.modules.reports.models import FinancialSummary
from portfolio_finance.modules.reports.service import financial_health_score, monthly_totals, months_ago

pytestmark = pytest.mark.anyio


def test_health_score_rewards_savings_and_no_debts():
    summary = FinancialSummary(
        total_income=Decimal("1000"),
        total_expenses=Decimal("400"),
        total_wallet_balance=Decimal("60000"),
    )
    assert financial_health_score(summary) == 100

    summary = FinancialSummary(
        total_income=Decimal("1000"),
        total_expenses=Decimal("1200"),
        pending_to_send=Decimal("50"),
    )
    assert financial_health_score(summary) == 35


def test_months_ago_crosses_year_boundaries():
    assert months_ago(dt.date(2026, 2, 17), 5) == dt.date(2025, 9, 1)
    assert months_ago(dt.date(2026, 12, 31), 0) == dt.date(2026, 12, 1)


def test_monthly_totals_buckets_in_order():
    rows = [
        (dt.date(2026, 3, 2), Decimal("5")),
        (dt.date(2026, 1, 9), Decimal("2")),
        (dt.date(2026, 3, 30), Decimal("1")),
    ]
    assert [(m.year, m.month, m.total) for m in monthly_totals(rows)] == [
        (2026, 1, Decimal("2")),
        (2026, 3, Decimal("6")),
    ]


async def test_overdue_is_classified_on_read(session, cache, make_wallet):
    wallet_id = await make_wallet(balance="100")
    expenses = ExpenseService.with_session(session, cache)
    person = await PersonService.with_session(session, cache).create({"name": "Omar"})
    today = dt.date(2026, 10, 19)

    late = await expenses.create(
        {
            "title": "Internet",
            "category": "Utilities",
            "amount": "50",
            "paid_amount": "0",
            "wallet_id": wallet_id,
            "next_due_date": "2026-10-01",
        }
    )
    await expenses.create(
        {"title": "Water", "category": "Utilities", "amount": "20", "wallet_id": wallet_id, "next_due_date": "2026-10-01"}
    )
    await PaymentService.with_session(session, cache).create(
        {"person_id": person.id, "type": "receive", "amount": "75", "end_date": "2026-10-10"}
    )

    overdue = await ReportService.with_session(session).overdue(today)

    assert [(item.kind, item.due_date) for item in overdue] == [
        ("expense", dt.date(2026, 10, 1)),
        ("payment", dt.date(2026, 10, 10)),
    ]
    assert overdue[0].id == late.id
    assert overdue[0].stored_status == "Pending"
    assert overdue[1].amount_due == Decimal("75.00")


async def test_summary_splits_settled_and_pending_payments(session, cache, make_wallet):
    wallet_id = await make_wallet(balance="500")
    person = await PersonService.with_session(session, cache).create({"name": "Zara"})
    payments = PaymentService.with_session(session, cache)
    await payments.create(
        {"person_id": person.id, "type": "send", "amount": "100", "paid_amount": "100", "wallet_id": wallet_id}
    )
    await payments.create({"person_id": person.id, "type": "send", "amount": "40"})
    await payments.create({"person_id": person.id, "type": "receive", "amount": "60"})

    summary = await ReportService.with_session(session).summary()

    assert summary.total_sent == Decimal("100.00")
    assert summary.pending_to_send == Decimal("40.00")
    assert summary.pending_to_receive == Decimal("60.00")
    assert summary.total_income == Decimal("500.00")
    assert summary.total_wallet_balance == Decimal("400.00")
