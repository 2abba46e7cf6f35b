from decimal import Decimal

import pytest

from portfolio_finance.infrastructure.cache import keys

pytestmark = pytest.mark.anyio

PREFIX = "/admin/finance"


async def _wallet(client, amount="1000"):
    wallet = (await client.post(f"{PREFIX}/wallets/add", json={"name": "Cash"})).json()["data"]
    await client.post(f"{PREFIX}/income/add", json={"source": "Salary", "amount": amount, "wallet_id": wallet["id"]})
    return wallet["id"]


async def _balance(client, wallet_id):
    return Decimal((await client.get(f"{PREFIX}/wallets/{wallet_id}")).json()["wallet"]["balance"])


def _lifecycle(wallet_id, edit_target="offline-e1"):
    return [
        {
            "id": 1,
            "url": f"{PREFIX}/expenses/add",
            "method": "POST",
            "body": {"id": "offline-e1", "title": "Dinner", "category": "Food", "amount": "100", "wallet_id": wallet_id},
        },
        {"id": 2, "url": f"{PREFIX}/expenses/edit/{edit_target}", "method": "POST", "body": {"paidAmount": "50"}},
        {"id": 3, "url": f"{PREFIX}/expenses/delete/offline-e1", "method": "POST", "body": {}},
    ]


async def test_create_edit_delete_batch_nets_to_zero(client):
    wallet_id = await _wallet(client)

    response = await client.post(f"{PREFIX}/sync", json={"changes": _lifecycle(wallet_id)})

    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert [result["success"] for result in body["results"]] == [True, True, True]
    assert [result["change"]["id"] for result in body["results"]] == [1, 2, 3]
    assert await _balance(client, wallet_id) == Decimal("1000")
    assert (await client.get(f"{PREFIX}/expenses")).json() == []


async def test_failed_change_does_not_stop_the_batch(client):
    wallet_id = await _wallet(client)

    response = await client.post(f"{PREFIX}/sync", json={"changes": _lifecycle(wallet_id, edit_target="missing")})

    results = response.json()["results"]
    assert [result["success"] for result in results] == [True, False, True]
    assert "missing" in results[1]["error"]
    assert "error" not in results[0]
    assert await _balance(client, wallet_id) == Decimal("1000")


async def test_failed_change_rolls_back_only_its_own_writes(client):
    wallet_id = await _wallet(client)
    changes = [
        {"url": f"{PREFIX}/expenses/add", "body": {"title": "Tea", "category": "Food", "amount": "10", "wallet_id": wallet_id}},
        {"url": f"{PREFIX}/wallets/transfer", "body": {"from_wallet_id": wallet_id, "to_wallet_id": "ghost", "amount": "5"}},
        {"url": f"{PREFIX}/blog/add", "body": {}},
    ]

    results = (await client.post(f"{PREFIX}/sync", json={"changes": changes})).json()["results"]

    assert [result["success"] for result in results] == [True, False, False]
    assert await _balance(client, wallet_id) == Decimal("990")
    [history_top] = (await client.get(f"{PREFIX}/wallets/{wallet_id}")).json()["history"][:1]
    assert history_top["source_type"] == "expense"


async def test_structured_metadata_is_used(client):
    wallet_id = await _wallet(client)
    created = (await client.post(
        f"{PREFIX}/expenses/add",
        json={"title": "Books", "category": "Study", "amount": "80", "wallet_id": wallet_id},
    )).json()["data"]

    changes = [
        {
            "url": "/legacy/form",
            "entity": "expenses",
            "action": "pay",
            "target_id": created["id"],
            "body": {"amount": "1"},
        }
    ]
    results = (await client.post(f"{PREFIX}/sync", json={"changes": changes})).json()["results"]

    # Already settled in full, so the extra payment is rejected.
    assert results[0]["success"] is False


async def test_sync_invalidates_every_list(client, cache_backend):
    await _wallet(client)
    for key in keys.ALL_FINANCE_KEYS:
        cache_backend.store[key] = "[]"

    await client.post(f"{PREFIX}/sync", json={"changes": []})

    assert not any(key in cache_backend.store for key in keys.ALL_FINANCE_KEYS)


@pytest.mark.parametrize("payload", [{}, {"changes": "nope"}, {"changes": {"url": "/x"}}, [1, 2]])
async def test_changes_must_be_a_list(client, payload):
    response = await client.post(f"{PREFIX}/sync", json=payload)
    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_batch_size_is_capped(client, settings):
    changes = [{"url": f"{PREFIX}/people/add", "body": {"name": f"P{i}"}} for i in range(settings.sync.max_batch_size + 1)]
    response = await client.post(f"{PREFIX}/sync", json={"changes": changes})
    assert response.status_code == 400


async def test_non_text_metadata_fails_only_its_own_change(client):
    wallet_id = await _wallet(client)
    changes = [
        {"url": f"{PREFIX}/expenses/add", "body": {"title": "Tea", "category": "Food", "amount": "10", "wallet_id": wallet_id}},
        {"url": f"{PREFIX}/expenses/add", "entity": "expenses", "action": 7, "body": {}},
        {"url": f"{PREFIX}/people/add", "body": {"name": "Sam"}},
    ]

    response = await client.post(f"{PREFIX}/sync", json={"changes": changes})

    assert response.status_code == 200
    results = response.json()["results"]
    assert [result["success"] for result in results] == [True, False, True]
    assert "action" in results[1]["error"]
    assert await _balance(client, wallet_id) == Decimal("990")
    assert [row["title"] for row in (await client.get(f"{PREFIX}/expenses")).json()] == ["Tea"]
