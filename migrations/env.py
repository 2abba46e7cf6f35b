"""Alembic migration environment for the finance schema."""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import AsyncEngine

from portfolio_finance.core.config import get_settings
from portfolio_finance.db import models  # noqa: F401
from portfolio_finance.infrastructure.database.base import Base
from portfolio_finance.infrastructure.database.session import dispose_engine, get_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _sync_url() -> str:
    """The configured async URL rewritten for offline SQL generation."""
    url = make_url(get_settings().database_url)
    driver = {"sqlite": "sqlite", "postgresql": "postgresql"}.get(url.get_backend_name())
    if driver is not None:
        url = url.set(drivername=driver)
    return url.render_as_string(hide_password=False)


def _configure(**kwargs) -> None:
    # SQLite cannot ALTER most constraints in place; batch mode rebuilds the table.
    url = kwargs.get("url") or str(kwargs["connection"].engine.url)
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(url=_sync_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def _run_migrations_online(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    connectable: AsyncEngine = get_engine()
    try:
        async with connectable.connect() as connection:
            await connection.run_sync(_run_migrations_online)
    finally:
        await dispose_engine()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
