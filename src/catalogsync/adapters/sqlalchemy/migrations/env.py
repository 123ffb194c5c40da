"""Alembic environment for the catalog store."""

from __future__ import annotations

from alembic import context
from sqlalchemy import pool

from catalogsync.adapters.sqlalchemy import create_catalog_engine, mapper_registry, start_mappers
from catalogsync.config import get_database_uri

config = context.config

start_mappers()
target_metadata = mapper_registry.metadata


def _database_uri() -> str:
    return config.get_main_option("sqlalchemy.url") or get_database_uri()


def run_migrations_offline() -> None:
    context.configure(
        url=_database_uri(),
        target_metadata=target_metadata,
        literal_binds=True,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # upgrade_head(engine=...) hands over a connection already inside a transaction
    connection = config.attributes.get("connection")
    if connection is not None:
        context.configure(
            connection=connection, target_metadata=target_metadata, render_as_batch=True
        )
        with context.begin_transaction():
            context.run_migrations()
        return

    engine = create_catalog_engine(_database_uri(), poolclass=pool.NullPool)
    try:
        with engine.connect() as own_connection:
            context.configure(
                connection=own_connection, target_metadata=target_metadata, render_as_batch=True
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
