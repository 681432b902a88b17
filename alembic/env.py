"""Alembic environment configuration.

The database URL comes from application settings, so migrations run against
the same database as the API.
"""

import logging
from logging.config import fileConfig

from sqlalchemy.engine import Connection

from alembic import context
from matchmaker import models  # noqa: F401
from matchmaker.config import get_settings
from matchmaker.database import Base, create_db_engine

logger = logging.getLogger(__name__)

config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Metadata for autogenerate support
target_metadata = Base.metadata
database_url = get_settings().database_url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (generates SQL without connecting)."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Execute migrations using the provided connection."""
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = create_db_engine(database_url)

    try:
        with connectable.connect() as connection:
            do_run_migrations(connection)
        logger.info("Migrations executed successfully")
    finally:
        connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
