"""Engine & Session Factory — builds the async engine every scope runs on.

Invariants:
    - Used by DatabaseSessionManager, alembic-free scripts, and test fixtures alike
    - SQLite engines start every transaction with BEGIN IMMEDIATE, so concurrent writers
      queue on the database lock instead of deadlocking on a lock upgrade
    - asyncpg engines carry a per-statement command timeout

Design Decisions:
    - aiosqlite's own BEGIN handling is switched off and replaced by the "begin" event
      (SQLAlchemy pysqlite/aiosqlite transaction recipe)
"""

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)


def create_ledger_engine(
    database_url: str,
    command_timeout: float | None = None,
    **engine_kwargs: Any,
) -> AsyncEngine:
    """Create the async engine, applying per-dialect transaction settings."""
    if command_timeout is not None and database_url.startswith("postgresql+asyncpg"):
        engine_kwargs.setdefault("connect_args", {})["command_timeout"] = command_timeout
    engine = create_async_engine(database_url, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        _use_immediate_transactions(engine)
    return engine


def _use_immediate_transactions(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the given engine."""
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
