import os
import sys
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy import create_engine


# --- add backend/ to sys.path (so "deposito.*" imports work without install)
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from alembic import context

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from deposito.db import get_database_url
from deposito.db_base import Base
target_metadata = Base.metadata

# Ensure all models are registered on Base.metadata for autogenerate
from deposito.repositories.sql_models import (  # noqa: F401
    AccountRow,
    CustomerRow,
    DepositoTypeRow,
    TransactionRow,
)


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode: emit SQL without a live connection."""
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(get_database_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
