"""
Seed the finance database.

Creates the default categories and a Cash wallet on an empty database and
prints an admin token for calling the API.
"""
import asyncio

from sqlalchemy import func, select

from portfolio_finance.core.config import get_settings
from portfolio_finance.core.container import build_cache
from portfolio_finance.core.security import create_access_token
from portfolio_finance.db.models import Category, Wallet
from portfolio_finance.infrastructure.cache import invalidate_committed
from portfolio_finance.infrastructure.database.session import dispose_engine, get_session, init_db
from portfolio_finance.modules.categories import CategoryService
from portfolio_finance.modules.wallets import WalletService

DEFAULT_CATEGORIES = [
    ("Food", "expense", "#f97316", "fa-utensils"),
    ("Transport", "expense", "#3b82f6", "fa-car"),
    ("Utilities", "expense", "#eab308", "fa-bolt"),
    ("Rent", "expense", "#8b5cf6", "fa-house"),
    ("Health", "expense", "#ef4444", "fa-heart-pulse"),
    ("Shopping", "expense", "#ec4899", "fa-bag-shopping"),
    ("Salary", "income", "#22c55e", "fa-briefcase"),
    ("Freelance", "income", "#14b8a6", "fa-laptop-code"),
]


async def seed_finance():
    settings = get_settings()
    await init_db()
    cache = build_cache(settings)

    async for db in get_session():
        if not await db.scalar(select(func.count()).select_from(Category)):
            categories = CategoryService.with_session(db, cache)
            for name, kind, color, icon in DEFAULT_CATEGORIES:
                await categories.create({"name": name, "type": kind, "color": color, "icon": icon})
            print(f"Created {len(DEFAULT_CATEGORIES)} categories")
        else:
            print("Categories already exist, skipping")

        if not await db.scalar(select(func.count()).select_from(Wallet)):
            await WalletService.with_session(db, cache).create({"name": "Cash", "type": "Cash", "is_default": "true"})
            print("Created default Cash wallet")
        else:
            print("Wallets already exist, skipping")

        await db.commit()
        await invalidate_committed(db)

    await cache.close()
    await dispose_engine()

    token = create_access_token("admin", settings.security.admin_role, settings, username="admin")
    print("=" * 50)
    print("Admin token (valid for one day):")
    print(token)
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(seed_finance())
