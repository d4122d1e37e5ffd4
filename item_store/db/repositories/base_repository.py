"""
Base repository - one short transaction per operation (SOLID: Dependency Inversion).
Challenge: The store has no multi-step transactions; every call must stand on its own.
Design: Repositories hold a session factory, not a session, and wrap driver errors.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from item_store.core.errors import StorageError
from item_store.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository keyed by primary key tuples."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], model: type[ModelType]):
        self.session_factory = session_factory
        self.model = model

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Open a session, begin, commit on success. SQLAlchemy errors become StorageError."""
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        except SQLAlchemyError as exc:
            raise StorageError(f"{self.model.__name__} storage failure: {exc}") from exc

    async def get_by_key(self, *key: Any) -> ModelType | None:
        """Fetch single entity by primary key."""
        async with self.transaction() as session:
            return await session.get(self.model, key)

    async def lock_by_key(self, session: AsyncSession, *key: Any) -> ModelType | None:
        """Load for update inside an open transaction (SELECT ... FOR UPDATE where supported)."""
        return await session.get(self.model, key, with_for_update=True)
