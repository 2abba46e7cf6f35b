import pytest

from portfolio_finance.modules.common.exceptions import ValidationError
from portfolio_finance.modules.sync.classifier import CREATE, DELETE, PAY, UPDATE, classify, parse_url
from portfolio_finance.modules.sync.models import ChangeTarget, SyncChange


@pytest.mark.parametrize(
    "url, expected",
    [
        ("/admin/finance/expenses/add", ChangeTarget("expenses", CREATE)),
        ("http://host/admin/finance/people/edit/p1", ChangeTarget("people", UPDATE, "p1")),
        ("/admin/finance/payments/delete/x9", ChangeTarget("payments", DELETE, "x9")),
        ("/admin/finance/wallets/transfer", ChangeTarget("transfers", CREATE)),
        ("/admin/finance/expenses/e1/pay", ChangeTarget("expenses", PAY, "e1")),
        ("/admin/finance/transfers/edit/t1?x=1", ChangeTarget("transfers", UPDATE, "t1")),
    ],
)
def test_known_route_shapes(url, expected):
    assert parse_url(url) == expected


@pytest.mark.parametrize(
    "url",
    [
        "/admin/finance/peoplepayments/add",
        "/admin/finance/payments",
        "/admin/finance/payments/edit",
        "/admin/finance/expenses/edit/a/b",
        "/admin/finance/income/e1/pay",
        "/admin/blog/add",
    ],
)
def test_anything_else_is_rejected(url):
    with pytest.raises(ValidationError):
        parse_url(url)


def test_structured_metadata_wins_over_the_url():
    change = SyncChange.from_mapping(
        {"url": "/admin/finance/expenses/add", "entity": "payments", "action": "edit", "targetId": "p7"}
    )
    assert classify(change) == ChangeTarget("payments", UPDATE, "p7")


def test_metadata_is_validated():
    with pytest.raises(ValidationError):
        classify(SyncChange.from_mapping({"url": "/x", "entity": "blog", "action": "create"}))
    with pytest.raises(ValidationError):
        classify(SyncChange.from_mapping({"url": "/x", "entity": "expenses", "action": "delete"}))


@pytest.mark.parametrize(
    "raw",
    [
        "nope",
        {"body": {}},
        {"url": "  "},
        {"url": "/a", "body": [1, 2]},
        {"url": "/a", "entity": "expenses", "action": 7},
        {"url": "/a", "entity": ["expenses"], "action": "add"},
        {"url": "/a", "entity": "expenses", "action": "edit", "targetId": 5},
    ],
)
def test_malformed_changes(raw):
    with pytest.raises(ValidationError):
        SyncChange.from_mapping(raw)
