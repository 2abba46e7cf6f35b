import json

import pytest

from portfolio_finance.infrastructure.cache import FinanceCache, discard_pending, invalidate_committed, keys
from portfolio_finance.infrastructure.cache.finance_cache import PENDING_INFO_KEY
from portfolio_finance.modules.common.exceptions import StorageUnavailableError
from portfolio_finance.modules.expenses import ExpenseService
from portfolio_finance.modules.wallets import WalletService

pytestmark = pytest.mark.anyio


async def test_read_through_fills_and_serves_from_cache(cache, cache_backend):
    calls = []

    async def load():
        calls.append(1)
        return [{"id": "a"}]

    assert await cache.read_through(keys.WALLETS, load) == [{"id": "a"}]
    assert await cache.read_through(keys.WALLETS, load) == [{"id": "a"}]
    assert len(calls) == 1
    assert json.loads(cache_backend.store[keys.WALLETS]) == [{"id": "a"}]


async def test_failing_backend_degrades_to_the_loader(cache, cache_backend):
    cache_backend.failing = True

    async def load():
        return ["fresh"]

    assert await cache.read_through(keys.PEOPLE, load) == ["fresh"]
    await cache.invalidate_all()


async def test_guard_runs_only_on_a_miss(cache):
    async def offline():
        raise StorageUnavailableError("database is unavailable")

    async def load():
        return ["rows"]

    with pytest.raises(StorageUnavailableError):
        await cache.read_through(keys.INCOME, load, guard=offline)

    await cache.set_json(keys.INCOME, ["cached"])
    assert await cache.read_through(keys.INCOME, load, guard=offline) == ["cached"]


async def test_undecodable_entries_are_dropped(cache, cache_backend):
    cache_backend.store[keys.EXPENSES] = "{not json"
    assert await cache.get_json(keys.EXPENSES) is None
    assert keys.EXPENSES not in cache_backend.store


async def test_expense_write_invalidates_dependent_lists(session, cache, cache_backend, make_wallet):
    wallet_id = await make_wallet(balance="100")
    for key in keys.ALL_FINANCE_KEYS:
        await cache.set_json(key, ["stale"])

    await ExpenseService.with_session(session, cache).create(
        {"title": "Fuel", "category": "Transport", "amount": "20", "wallet_id": wallet_id}
    )

    for key in (keys.EXPENSES, keys.WALLETS, keys.CATEGORIES):
        assert key not in cache_backend.store
    assert keys.PEOPLE in cache_backend.store


async def test_ttl_is_passed_to_the_backend():
    seen = {}

    class RecordingBackend:
        async def set(self, key, value, ttl_seconds):
            seen[key] = ttl_seconds

    await FinanceCache(RecordingBackend(), ttl_seconds=42).set_json("k", 1)
    assert seen == {"k": 42}


async def test_read_before_commit_does_not_outlive_the_commit(session_factory, cache, cache_backend):
    async with session_factory() as writer:
        wallet = await WalletService.with_session(writer, cache).create({"name": "Cash"})
        await writer.commit()
        await invalidate_committed(writer)

        await ExpenseService.with_session(writer, cache).create(
            {"title": "Fuel", "category": "Transport", "amount": "20", "wallet_id": wallet.id}
        )

        async def load_committed_expenses():
            async with session_factory() as reader:
                return [row.id for row in await ExpenseService.with_session(reader, cache).list_expenses()]

        assert await cache.read_through(keys.EXPENSES, load_committed_expenses) == []
        assert keys.EXPENSES in cache_backend.store

        await writer.commit()
        await invalidate_committed(writer)

        assert keys.EXPENSES not in cache_backend.store
        assert len(await cache.read_through(keys.EXPENSES, load_committed_expenses)) == 1


async def test_invalidations_are_remembered_per_session(session, cache, cache_backend):
    await cache.set_json(keys.PEOPLE, ["stale"])
    bound = cache.for_session(session)

    await bound.invalidate_for(["person"])
    await cache.set_json(keys.PEOPLE, ["refilled"])
    await invalidate_committed(session)

    assert keys.PEOPLE not in cache_backend.store
    assert PENDING_INFO_KEY not in session.info


async def test_rolled_back_invalidations_are_forgotten(session, cache, cache_backend):
    await cache.for_session(session).invalidate_for(["wallet"])
    discard_pending(session)
    await cache.set_json(keys.WALLETS, ["current"])

    await invalidate_committed(session)

    assert keys.WALLETS in cache_backend.store
    assert PENDING_INFO_KEY not in session.info


async def test_unbound_cache_keeps_no_pending_keys(session, cache):
    await cache.invalidate_all()
    assert PENDING_INFO_KEY not in session.info
