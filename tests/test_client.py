import json
from decimal import Decimal

import httpx
import pytest

from portfolio_finance.client import OfflineQueue, QueuedChange, ReplayOutcome, SyncClient, SyncState

pytestmark = pytest.mark.anyio


@pytest.fixture
async def queue(tmp_path):
    queue = OfflineQueue(f"sqlite+aiosqlite:///{tmp_path / 'queue.db'}")
    await queue.open()
    yield queue
    await queue.close()


def _client(queue, handler):
    return SyncClient.connect("http://finance.test", "token", queue, transport=httpx.MockTransport(handler))


def _sync_handler(outcomes, seen):
    """Answer the sync endpoint with one result per change from ``outcomes``."""

    def handler(request):
        payload = json.loads(request.content)
        seen.append(payload)
        results = [
            {"success": ok, "change": change, **({} if ok else {"error": "boom"})}
            for ok, change in zip(outcomes, payload["changes"])
        ]
        return httpx.Response(200, json={"success": True, "results": results})

    return handler


async def test_queue_is_durable_and_ordered(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'q.db'}"
    first = OfflineQueue(url)
    await first.open()
    ids = [await first.enqueue(QueuedChange(url="/admin/finance/people/add", body={"name": n})) for n in "abc"]
    await first.close()

    reopened = OfflineQueue(url)
    await reopened.open()
    items = await reopened.list_all()
    assert [item.id for item in items] == ids
    assert [item.body["name"] for item in items] == ["a", "b", "c"]

    await reopened.remove_by_id(ids[1])
    assert [item.body["name"] for item in await reopened.list_all()] == ["a", "c"]
    await reopened.clear_all()
    assert await reopened.list_all() == []
    await reopened.close()


async def test_submit_queues_while_offline(queue):
    client = _client(queue, lambda request: pytest.fail("no request expected while offline"))
    client.go_offline()

    result = await client.submit("/admin/finance/expenses/add", {"title": "Tea"}, entity="expenses", action="create")

    assert result.queued
    [item] = await queue.list_all()
    assert item.entity == "expenses"
    assert item.body == {"title": "Tea"}
    await client.aclose()


async def test_transport_error_switches_to_offline(queue):
    def unreachable(request):
        raise httpx.ConnectError("no route", request=request)

    client = _client(queue, unreachable)
    result = await client.submit("/admin/finance/people/add", {"name": "Ali"})

    assert result.queued
    assert client.state is SyncState.OFFLINE_QUEUING
    assert len(await queue.list_all()) == 1
    await client.aclose()


async def test_online_submit_goes_straight_to_the_server(queue):
    client = _client(queue, lambda request: httpx.Response(200, json={"success": True, "data": {"id": "p1"}}))

    result = await client.submit("/admin/finance/people/add", {"name": "Ali"})

    assert not result.queued
    assert result.data["data"]["id"] == "p1"
    assert await queue.list_all() == []
    await client.aclose()


async def test_full_success_empties_the_queue(queue):
    seen = []
    client = _client(queue, _sync_handler([True, True], seen))
    for name in ("a", "b"):
        await queue.enqueue(QueuedChange(url="/admin/finance/people/add", body={"name": name}))
    client.go_offline()

    report = await client.go_online()

    assert report.outcome is ReplayOutcome.ALL_OK
    assert client.state is SyncState.ONLINE_IDLE
    assert await queue.list_all() == []
    assert [change["body"]["name"] for change in seen[0]["changes"]] == ["a", "b"]
    await client.aclose()


async def test_partial_success_keeps_failed_items(queue):
    client = _client(queue, _sync_handler([True, False, True], []))
    for name in ("a", "b", "c"):
        await queue.enqueue(QueuedChange(url="/admin/finance/people/add", body={"name": name}))

    report = await client.replay()

    assert report.outcome is ReplayOutcome.PARTIAL_FAIL
    assert report.errors == ["boom"]
    assert [item.body["name"] for item in await queue.list_all()] == ["b"]
    await client.aclose()


@pytest.mark.parametrize(
    "handler",
    [
        lambda request: httpx.Response(500, json={"success": False, "message": "Sync failed"}),
        lambda request: httpx.Response(200, text="not json"),
    ],
)
async def test_server_failure_keeps_everything(queue, handler):
    client = _client(queue, handler)
    await queue.enqueue(QueuedChange(url="/admin/finance/people/add", body={"name": "a"}))

    report = await client.go_online()

    assert report.outcome is ReplayOutcome.FAILED
    assert client.state is SyncState.ONLINE_IDLE
    assert len(await queue.list_all()) == 1
    await client.aclose()


async def test_unreachable_server_on_replay_stays_offline(queue):
    def unreachable(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    client = _client(queue, unreachable)
    await queue.enqueue(QueuedChange(url="/admin/finance/people/add", body={"name": "a"}))

    report = await client.go_online()

    assert report.outcome is ReplayOutcome.FAILED
    assert client.state is SyncState.OFFLINE_QUEUING
    assert len(await queue.list_all()) == 1
    await client.aclose()


async def test_empty_queue_replays_nothing(queue):
    client = _client(queue, lambda request: pytest.fail("nothing to send"))
    assert (await client.go_online()).outcome is ReplayOutcome.EMPTY
    await client.aclose()


async def test_offline_session_replays_against_the_api(app, queue):
    client = SyncClient.connect("http://testserver", "token", queue, transport=httpx.ASGITransport(app=app))
    wallet = await client.submit("/admin/finance/wallets/add", {"name": "Cash"})
    wallet_id = wallet.data["data"]["id"]

    client.go_offline()
    await client.submit("/admin/finance/income/add", {"source": "Gift", "amount": "70", "wallet_id": wallet_id})
    await client.submit(
        "/admin/finance/expenses/add",
        {"id": "local-1", "title": "Cake", "category": "Food", "amount": "20", "wallet_id": wallet_id},
    )
    await client.submit("/admin/finance/expenses/edit/local-1", {"amount": "25", "paid_amount": "25"})

    report = await client.go_online()

    assert report.outcome is ReplayOutcome.ALL_OK
    assert await queue.list_all() == []
    detail = (await client.http.get(f"/admin/finance/wallets/{wallet_id}")).json()
    assert Decimal(detail["wallet"]["balance"]) == Decimal("45")
    await client.aclose()
