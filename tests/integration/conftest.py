"""SQLite-backed fixtures for running the SQLAlchemy repositories without Postgres."""
from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime, timezone

import pytest_asyncio
from sqlalchemy import BigInteger, event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from socialapi.infrastructure.db import models  # noqa: F401  registers tables
from socialapi.infrastructure.db.base import Base


# INTEGER PRIMARY KEY is what makes SQLite assign ids
@compiles(BigInteger, "sqlite")
def _bigint_on_sqlite(type_, compiler, **kw) -> str:
    return "INTEGER"


@compiles(JSONB, "sqlite")
def _jsonb_on_sqlite(type_, compiler, **kw) -> str:
    return "JSON"


def _sqlite_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f")


@pytest_asyncio.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _register_now(dbapi_conn, _record) -> None:
        dbapi_conn.create_function("now", 0, _sqlite_now)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)

    await engine.dispose()
