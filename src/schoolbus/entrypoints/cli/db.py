"""``schoolbus db``: forward-only schema management on top of Alembic.

Only forward operations are exposed (``upgrade``) along with read-only
inspection (``current``, ``heads``, ``history``, ``status``). Alembic output
goes to stdout; prompts and status lines go to stderr.

The database comes from ``SCHOOLBUS_DB_URL``. Commands that touch the database
check it is reachable first and fail with a `click.ClickException` otherwise.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from schoolbus import config
from schoolbus.adapters.db.engine import make_engine

from .helpers import error, sanitize_url, success, warn
from .helpers.db_url import require_db_url

if TYPE_CHECKING:
    from alembic.config import Config
    from sqlalchemy.engine import Engine

UPGRADE_SCHEMA_WARNING = (
    "This will upgrade the driver registry schema to the latest version.\n"
    "Please ensure you have a backup before proceeding."
)

UPGRADE_SCHEMA_INSTRUCTIONS = "Run 'schoolbus db upgrade' to update the schema."

verbose_option = click.option(
    "--verbose",
    "-v",
    "verbose",
    is_flag=True,
    help="Show alembic's more verbose output.",
)


class MigrationStatus(Enum):
    """Where the database schema stands relative to the packaged migrations."""

    UP_TO_DATE = "up to date"
    OUT_OF_DATE = "out of date"
    UNINITIALIZED = "uninitialized"

    @classmethod
    def compare(cls, current: str | None, head: str | None) -> MigrationStatus:
        """Classify the ``current`` revision against ``head``."""
        if current is None:
            return cls.UNINITIALIZED
        if current == head:
            return cls.UP_TO_DATE
        return cls.OUT_OF_DATE


def current_revision(engine: Engine) -> str | None:
    """Return the revision stamped in the database, or None if never migrated."""
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def head_revision(cfg: Config) -> str | None:
    """Return the head revision of the packaged migration scripts."""
    heads = ScriptDirectory.from_config(cfg).get_heads()
    return heads[0] if heads else None


@click.group(cls=clickx.ExtraGroup)
def db() -> None:
    """Database management commands."""


@db.command()
@verbose_option
def current(verbose: bool) -> None:
    """Show current DB revision."""
    cfg = config.build_alembic_config(db_url=require_db_url(), stdout=sys.stdout)
    command.current(cfg, verbose=verbose)


@db.command()
@verbose_option
def heads(verbose: bool) -> None:
    """Show available head revisions."""
    command.heads(config.build_alembic_config(stdout=sys.stdout), verbose=verbose)


@db.command()
@verbose_option
@click.option(
    "--indicate-current",
    "-i",
    "indicate_current",
    is_flag=True,
    help="Indicate the current revision.",
)
def history(verbose: bool, indicate_current: bool) -> None:
    """Show revision history."""
    url = require_db_url() if indicate_current else None
    cfg = config.build_alembic_config(db_url=url, stdout=sys.stdout)
    command.history(cfg, verbose=verbose, indicate_current=indicate_current)


@db.command()
@click.option("--sql", is_flag=True, help="Generate SQL without executing.")
@click.option("--force", is_flag=True, help="Upgrade without confirmation.")
def upgrade(sql: bool, force: bool) -> None:
    """Upgrade the database to the head revision."""
    url = require_db_url()
    cfg = config.build_alembic_config(db_url=url, stdout=sys.stdout)
    if not force and not sql:
        warn(UPGRADE_SCHEMA_WARNING)
        click.secho(f"db: {click.style(sanitize_url(url), underline=True)}", err=True)
        click.confirm("Are you sure you want to proceed?", abort=True, err=True)
    command.upgrade(cfg, revision="head", sql=sql)
    if not sql:
        success("Upgrade complete!")


@db.command()
def status() -> None:
    """Show database connection and schema status."""
    try:
        url = require_db_url()
    except click.ClickException as e:
        error("Cannot connect to database")
        click.echo(e.message)
        return

    engine = make_engine(url)
    try:
        rev = current_revision(engine)
    finally:
        engine.dispose()
    head = head_revision(config.build_alembic_config(db_url=url))
    migration_status = MigrationStatus.compare(rev, head)

    success("Database reachable")
    click.echo(f"Backend : {engine.dialect.name}")
    click.echo(f"URL     : {sanitize_url(url)}")
    click.echo(
        f"Schema  : {rev} ({migration_status.value})"
        if rev is not None
        else f"Schema  : {migration_status.value}"
    )
    if migration_status is not MigrationStatus.UP_TO_DATE:
        warn(UPGRADE_SCHEMA_INSTRUCTIONS)
