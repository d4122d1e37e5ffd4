"""
Alembic env - sync engine for migrations (Alembic runs in sync context).
The async driver in DATABASE_URL is swapped for its sync counterpart.
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool
from alembic import context

from item_store.config import get_settings
from item_store.db.base import Base
from item_store.db.models import Item  # noqa: F401 - ensure models are registered

SYNC_DRIVERS = {
    "postgresql+asyncpg": "postgresql+psycopg2",
    "sqlite+aiosqlite": "sqlite",
}

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

sync_url = get_settings().database_url
for async_driver, sync_driver in SYNC_DRIVERS.items():
    sync_url = sync_url.replace(async_driver, sync_driver)
config.set_main_option("sqlalchemy.url", sync_url)

target_metadata = Base.metadata
# SQLite cannot ALTER most constraints in place; batch mode recreates the table
render_as_batch = sync_url.startswith("sqlite")


def run_migrations_offline() -> None:
    """Emit SQL only, no DB connection."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=render_as_batch,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=render_as_batch,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
