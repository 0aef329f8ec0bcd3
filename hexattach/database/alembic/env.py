# hexattach/database/alembic/env.py
from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool, text
from sqlalchemy.engine import Connection

from hexattach.common.settings import get_settings
from hexattach.database.models import Base  # registers every model on Base.metadata

cfg = get_settings()

alembic_config = context.config
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

database_url = os.getenv("DATABASE_URL", cfg.database_url)
target_metadata = Base.metadata
version_table_schema = cfg.alembic_version_table_schema


def include_object(object, name, type_, reflected, compare_to):
    """Autogenerate only sees our schema (plus unqualified tables on the search_path)."""
    if type_ != "table":
        return True
    obj_schema = getattr(object, "schema", None)
    return obj_schema is None or obj_schema in {cfg.db_schema, version_table_schema}


def _configure_kwargs() -> dict:
    return dict(
        target_metadata=target_metadata,
        include_schemas=True,
        include_object=include_object,
        version_table_schema=version_table_schema,
    )


def run_migrations_offline() -> None:
    context.configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_kwargs(),
    )
    with context.begin_transaction():
        context.run_migrations()


def _prepare_connection(conn: Connection) -> None:
    """Schema, search_path and pgcrypto (gen_random_uuid) before any DDL."""
    conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{cfg.db_schema}"'))
    conn.execute(text(f'SET search_path TO "{cfg.db_schema}", public'))
    conn.execute(text('CREATE EXTENSION IF NOT EXISTS "pgcrypto"'))


def run_migrations_online() -> None:
    connectable = create_engine(database_url, poolclass=pool.NullPool, future=True)

    with connectable.connect() as connection:
        _prepare_connection(connection)
        context.configure(
            connection=connection,
            compare_type=True,
            compare_server_default=True,
            **_configure_kwargs(),
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
