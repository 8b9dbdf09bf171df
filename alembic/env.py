"""
Migration environment for the partmatch schema.
Runs against the sync psycopg2 driver; the app's asyncpg URL is rewritten for it.
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

from partmatch.config import get_settings
from partmatch.db import models  # noqa: F401 - registers users, listings, match_requests, matches
from partmatch.db.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

ASYNC_DRIVER = "postgresql+asyncpg"
SYNC_DRIVER = "postgresql+psycopg2"

config.set_main_option("sqlalchemy.url", get_settings().database_url.replace(ASYNC_DRIVER, SYNC_DRIVER))
target_metadata = Base.metadata

# Autogenerate also diffs column types (price precision) and server defaults
COMPARE_OPTIONS = {"compare_type": True, "compare_server_default": True}


def run_migrations_offline() -> None:
    """Emit SQL for review instead of applying it."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARE_OPTIONS,
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
        context.configure(connection=connection, target_metadata=target_metadata, **COMPARE_OPTIONS)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
