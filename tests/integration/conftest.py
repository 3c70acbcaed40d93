"""Fixtures for tests against a real SQL driver."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from crudgen.api import demo
from crudgen.core.ports.store import ResourceStore

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[AsyncEngine, None]:
    """Per-test engine; StaticPool keeps the single in-memory database alive."""
    engine = create_async_engine(TEST_DB_URL, poolclass=StaticPool)
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    await demo.init_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sql_stores(database: AsyncEngine) -> dict[str, ResourceStore]:
    return demo.sql_stores(database)
