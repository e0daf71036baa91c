"""
Alembic environment for the supply chain record store.

The target database is the record store's DATABASE_URL unless a one-off
target is given with ``alembic -x db_url=... upgrade head``.
"""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from db.base import Base
from db.config import RecordStoreConfigError, read_record_store_settings, to_psycopg_url
from db.models import (  # noqa: F401 imports register the tables on Base.metadata
    Factory,
    Product,
    Retailer,
    Shipment,
    Supplier,
    UploadLog,
    Warehouse,
)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _migration_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("db_url", "").strip()
    if not override:
        return read_record_store_settings().database_url

    url = to_psycopg_url(override)
    if not url.startswith("postgresql"):
        raise RecordStoreConfigError("Migrations target PostgreSQL only; check -x db_url.")
    return url


def _configure(**options: object) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        **options,
    )


def run_migrations_offline() -> None:
    _configure(url=_migration_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(_migration_url(), poolclass=pool.NullPool)

    with engine.connect() as connection:
        _configure(connection=connection)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
