"""
Pytest fixtures - test DB, clients, translator and in-memory store.
Challenge: Isolated tests; a fresh SQLite file per test, no external translation service.
"""

import asyncio
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from item_store.core.dependencies import Store, get_item_service
from item_store.db.base import Base
from item_store.db.repositories.item_repository import ItemRepository
from item_store.db.session import build_session_factory, get_session_factory
from item_store.main import app
from item_store.services.item_service import ItemService
from item_store.translation.translate_client import get_translator
from tests.fakes import CountingTranslator, MemoryStore, TickingClock


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def translator() -> CountingTranslator:
    return CountingTranslator()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest.fixture
def repo(session_factory) -> ItemRepository:
    return ItemRepository(session_factory)


def _override_dependencies(session_factory, translator, clock) -> None:
    def item_service(store: Store) -> ItemService:
        return ItemService(store, clock)

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_translator] = lambda: translator
    app.dependency_overrides[get_item_service] = item_service


@pytest_asyncio.fixture
async def client(session_factory, translator, clock) -> AsyncGenerator[AsyncClient, None]:
    _override_dependencies(session_factory, translator, clock)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def sync_client(tmp_path, translator, clock):
    """Synchronous client for pytest-bdd steps. NullPool: no connection outlives its loop."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bdd.db'}", poolclass=NullPool)

    async def create_schema():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_schema())
    _override_dependencies(build_session_factory(engine), translator, clock)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())
