"""
Async database engine and session factory.
Challenge: The store offers single-item operations only, so there is no request-wide session.
Design: Repositories receive the factory and open one short transaction per call.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from item_store.config import get_settings

settings = get_settings()


def _engine_options(url: str) -> dict:
    """Pool sizing only applies to server databases; SQLite picks its own pool class."""
    opts: dict = {"echo": settings.debug, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        opts.update(pool_size=10, max_overflow=20)
    return opts


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Async engine with connection pool (scalability)
engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))
async_session_maker = build_session_factory(engine)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """FastAPI dependency; overridden in tests with a SQLite-backed factory."""
    return async_session_maker


SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]
