"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .session import AsyncSessionFactory, build_engine, get_engine, get_session, init_db

__all__ = ["Base", "AsyncSessionFactory", "build_engine", "get_engine", "get_session", "init_db"]
