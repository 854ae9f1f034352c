"""Fixtures running the store contract tests against every backend.

The SQL store uses an in-memory SQLite database through aiosqlite, one fresh
database per test.
"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

import staybook.models  # noqa: F401  registers the tables on Base.metadata
from staybook.database import Base
from staybook.stores.base import BookingStore
from staybook.stores.memory import InMemoryBookingStore
from staybook.stores.sql import SqlBookingStore


@pytest_asyncio.fixture
async def sql_session() -> AsyncGenerator[AsyncSession, None]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request, sql_session: AsyncSession) -> BookingStore:
    """Each contract test runs once per store implementation."""
    if request.param == "memory":
        return InMemoryBookingStore()
    return SqlBookingStore(sql_session)
