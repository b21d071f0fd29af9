# 📄 File: migrations/env.py
# 🧭 Purpose (Layman Explanation):
# Tells Alembic where the membership database lives and which tables it should know
# about, so schema changes can be applied the same way in every environment.
# 🧪 Purpose (Technical Summary):
# Alembic environment for the membership schema. The URL comes from the application
# Settings (DATABASE_URL or DB_* parts), online migrations run through an async engine
# (asyncpg / aiosqlite) and offline mode renders plain SQL.
# 🔗 Dependencies:
# - alembic (migration tool)
# - SQLAlchemy async engine
# - app.shared.config.settings
# - app.modules.membership.infrastructure.database.models
# 🔄 Connected Modules / Calls From:
# - alembic CLI commands (upgrade, downgrade, revision)

import asyncio
import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from app.shared.config.settings import get_settings  # noqa: E402
from app.shared.infrastructure.database.connection import Base  # noqa: E402

# Registers every membership table on Base.metadata
from app.modules.membership.infrastructure.database import models  # noqa: E402,F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_database_url() -> str:
    """Database URL, an explicit ``-x url=...`` argument wins over Settings."""
    x_args = context.get_x_argument(as_dictionary=True)
    return x_args.get("url") or get_settings().database_url


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Only a URL is configured, calls to context.execute() emit SQL to the
    script output.
    """
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_database_url()

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations against a live database through the async driver."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
