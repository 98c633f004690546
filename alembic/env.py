"""Alembic environment for the dispatch schema (technicians, work orders, users)."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from fieldops.adapters.persistence.database import Base
from fieldops.adapters.persistence import models  # noqa: F401  registers the tables
from fieldops.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _sync_url() -> str:
    """DATABASE_URL with the asyncpg driver swapped for psycopg2 (migrations run sync)."""
    return settings.database_url.replace("+asyncpg", "+psycopg2")


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of touching a database."""
    _configure(url=_sync_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(_sync_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _configure(connection=connection)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
