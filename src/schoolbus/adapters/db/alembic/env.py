"""Alembic environment for the SCHOOLBUS keyed store schema.

- The database URL is taken from ``-x url=...``, then the ``sqlalchemy.url``
  main option (set by `schoolbus.config.build_alembic_config`), then
  ``SCHOOLBUS_DB_URL``.
- Autogenerate compares column types and server defaults.
- SQLite runs in batch mode so ALTER TABLE can be emulated.
"""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

import schoolbus.adapters.keyed_store.schema  # noqa: F401 # pylint: disable=unused-import
from schoolbus.adapters.db.dialects import DialectName
from schoolbus.adapters.db.metadata import metadata
from schoolbus.config import DB_URL_ENVVAR

# pylint: disable=no-member

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

COMPARE_OPTIONS = {"compare_type": True, "compare_server_default": True}


def resolve_url() -> str:
    """Return the database URL to migrate."""
    url = context.get_x_argument(as_dictionary=True).get("url")
    url = url or config.get_main_option("sqlalchemy.url")
    # an uninterpolated "%(...)s" placeholder counts as unset
    if not url or "%(" in url:
        url = os.environ.get(DB_URL_ENVVAR)
    if not url:
        raise RuntimeError(f"Set {DB_URL_ENVVAR} to your database URL.")
    return url


def run_migrations_offline() -> None:
    """Emit migration SQL to the script output without connecting."""
    context.configure(
        url=resolve_url(),
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect and apply migrations."""
    connectable = engine_from_config(
        {"sqlalchemy.url": resolve_url()},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=metadata,
            render_as_batch=(
                DialectName.from_sqlalchemy(connection) is DialectName.SQLITE
            ),
            **COMPARE_OPTIONS,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
