"""Alembic environment for the catalog tables.

The target database comes from the same place the service reads it:
`alembic -x url=...` first, then storage.postgres.dsn from the stockroom
settings, then STOCKROOM_DATABASE_URL / DATABASE_URL. Migrations are
plain op.create_table scripts, so there is no ORM metadata to compare.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

from stockroom.config import get_settings
from stockroom.db.pool import database_url, migration_url

VERSION_TABLE = "stockroom_alembic_version"

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _target_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("url")
    return migration_url(override or database_url(get_settings().storage.postgres.dsn))


def _configure(**kwargs) -> None:
    context.configure(target_metadata=None, version_table=VERSION_TABLE, **kwargs)


def _run(connection=None) -> None:
    if connection is None:
        _configure(url=_target_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    else:
        _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def _run_online() -> None:
    engine = create_async_engine(_target_url(), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _run()
else:
    asyncio.run(_run_online())
