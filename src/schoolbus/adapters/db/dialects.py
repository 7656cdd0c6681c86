"""Dialect names and dialect-specific statement helpers.

SCHOOLBUS runs on PostgreSQL and SQLite. Both support ``INSERT ... ON
CONFLICT``, but SQLAlchemy exposes it through separate dialect modules; this
module picks the right one so adapters never branch on raw strings.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.engine import Connection, Engine
    from sqlalchemy.sql.dml import Insert


class UnsupportedDialect(Exception):
    """Raised when an unsupported database dialect is encountered."""


class DialectName(str, Enum):
    """Supported SQLAlchemy dialect names.

    Attributes:
        POSTGRES: PostgreSQL dialect (``"postgresql"``).
        SQLITE:   SQLite dialect (``"sqlite"``).
    """

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Normalize a dialect string, ignoring any ``+driver`` suffix.

        Accepts ``postgres``/``pg`` as aliases for PostgreSQL.

        Raises:
            UnsupportedDialect: if the dialect is not recognized or supported.
        """

        base = (dialect_str or "").strip().lower().split("+", 1)[0]
        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == "sqlite":
            return cls.SQLITE
        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Extract the dialect from a SQLAlchemy Engine or Connection.

        Raises:
            UnsupportedDialect: if the object has no dialect or it is unsupported.
        """
        try:
            name = obj.dialect.name
        except AttributeError as e:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            ) from e
        return cls.from_string(name)


def build_upsert(
    dialect: DialectName,
    table: Table,
    *,
    values: dict[str, Any],
    index_elements: list[str],
    update_columns: list[str],
    extra_updates: dict[str, Any] | None = None,
) -> Insert:
    """Build an ``INSERT ... ON CONFLICT DO UPDATE`` for the given dialect.

    Args:
        dialect: Target dialect.
        table: Table to write.
        values: Column values for the inserted row.
        index_elements: Columns of the conflicting unique/primary key.
        update_columns: Columns overwritten with the incoming values when the row
            already exists.
        extra_updates: Additional column expressions applied on conflict only.

    Returns:
        The dialect-specific insert statement.
    """
    insert = pg_insert if dialect is DialectName.POSTGRES else sqlite_insert
    stmt = insert(table).values(**values)
    set_ = {name: stmt.excluded[name] for name in update_columns}
    set_.update(extra_updates or {})
    return stmt.on_conflict_do_update(index_elements=index_elements, set_=set_)


def build_insert_if_absent(
    dialect: DialectName,
    table: Table,
    *,
    values: dict[str, Any],
    index_elements: list[str],
) -> Insert:
    """Build an ``INSERT ... ON CONFLICT DO NOTHING`` for the given dialect.

    A concurrent insert of the same key waits for the other transaction and
    then does nothing, so the row exists afterwards either way.
    """
    insert = pg_insert if dialect is DialectName.POSTGRES else sqlite_insert
    return insert(table).values(**values).on_conflict_do_nothing(
        index_elements=index_elements
    )
