from __future__ import annotations

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio_finance.core.config import CacheSettings, Settings, SyncSettings, get_settings
from portfolio_finance.core.security import require_admin
from portfolio_finance.db import models  # noqa: F401
from portfolio_finance.infrastructure.cache import FinanceCache
from portfolio_finance.infrastructure.database.base import Base
from portfolio_finance.infrastructure.database.session import build_engine
from portfolio_finance.infrastructure.health import StoreHealth
from portfolio_finance.interfaces.http.deps import get_cache, get_db_session, get_store_health
from portfolio_finance.main import create_app
from portfolio_finance.modules.common.exceptions import CacheError
from portfolio_finance.modules.income import IncomeService
from portfolio_finance.modules.wallets import WalletService
from portfolio_finance.schemas import TokenData


class MemoryCacheBackend:
    """In-process cache backend; ``failing`` makes every call raise."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.failing = False

    def _check(self) -> None:
        if self.failing:
            raise CacheError("backend down")

    async def get(self, key: str) -> str | None:
        self._check()
        return self.store.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._check()
        self.store[key] = value

    async def delete(self, *keys: str) -> None:
        self._check()
        for key in keys:
            self.store.pop(key, None)

    async def ping(self) -> bool:
        return not self.failing

    async def close(self) -> None:
        return None


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        notifications_enabled=True,
        cache=CacheSettings(enabled=False),
        sync=SyncSettings(max_batch_size=10),
    )


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'finance.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def cache_backend() -> MemoryCacheBackend:
    return MemoryCacheBackend()


@pytest.fixture
def cache(cache_backend) -> FinanceCache:
    return FinanceCache(cache_backend, ttl_seconds=60)


@pytest.fixture
def app(engine, session_factory, cache, settings):
    app = create_app(settings)

    async def _session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _session
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_store_health] = lambda: StoreHealth(engine, timeout=2.0)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[require_admin] = lambda: TokenData(subject="admin", role="admin", username="admin")
    return app


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
        headers={"Accept": "application/json"},
    ) as client:
        yield client


@pytest.fixture
def make_wallet(session, cache):
    """Create a wallet, funding it through an income record when ``balance`` is set."""

    async def _make(name: str = "Cash", balance: str = "0") -> str:
        wallet = await WalletService.with_session(session, cache).create({"name": name})
        if Decimal(balance):
            await IncomeService.with_session(session, cache).create(
                {"source": "Opening balance", "amount": balance, "wallet_id": wallet.id}
            )
        return wallet.id

    return _make


@pytest.fixture
def balance_of(session, cache):
    async def _balance(wallet_id: str) -> Decimal:
        return (await WalletService.with_session(session, cache).get_wallet(wallet_id)).balance

    return _balance
