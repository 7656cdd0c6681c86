"""Implementation of KeyedStore using SQLAlchemy."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError

from schoolbus.adapters.db.dialects import (
    DialectName,
    build_insert_if_absent,
    build_upsert,
)
from schoolbus.interfaces.keyed_store import (
    COUNTER_START,
    DuplicateRecordKey,
    InvalidCounterValue,
    KeyedStore,
    Record,
    StoreKey,
)

from .schema import counters, keyed_records

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection


class SqlAlchemyKeyedStore(KeyedStore):
    """KeyedStore implementation that supports both Postgres and SQLite.

    Writes are issued on the given connection and only become durable when the
    owning unit of work commits.

    Locking:
      - Postgres: ``get(for_update=True)`` is ``SELECT ... FOR UPDATE`` and
        `allocate` is a single ``UPDATE ... RETURNING``, so both hold row
        locks until the transaction ends.
      - SQLite: ``FOR UPDATE`` is not rendered. Engines from `make_engine`
        open every transaction with ``BEGIN IMMEDIATE``, so a unit of work
        holds the database write lock from its first statement on.

    A duplicate `add` runs inside a savepoint, so the surrounding transaction
    stays usable after `DuplicateRecordKey`.
    """

    def __init__(self, connection: Connection):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)

    # --- records ---

    def get(self, key: StoreKey, *, for_update: bool = False) -> Record | None:
        stmt = select(keyed_records.c.value).where(
            keyed_records.c.map_name == key.map_name,
            keyed_records.c.record_key == key.canonical(),
        )
        if for_update:
            stmt = stmt.with_for_update()
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return dict(row.value)

    def set(self, key: StoreKey, record: Record) -> None:
        self.connection.execute(
            build_upsert(
                self.dialect,
                keyed_records,
                values={
                    "map_name": key.map_name,
                    "record_key": key.canonical(),
                    "value": record,
                },
                index_elements=["map_name", "record_key"],
                update_columns=["value"],
                extra_updates={"updated_at": func.current_timestamp()},
            )
        )

    def add(self, key: StoreKey, record: Record) -> None:
        stmt = insert(keyed_records).values(
            map_name=key.map_name, record_key=key.canonical(), value=record
        )
        try:
            with self.connection.begin_nested():
                self.connection.execute(stmt)
        except IntegrityError as e:
            raise DuplicateRecordKey(key) from e

    # --- counters ---

    def read_counter(self, name: str) -> int:
        stmt = select(counters.c.value).where(counters.c.name == name)
        if (value := self.connection.execute(stmt).scalar_one_or_none()) is None:
            return COUNTER_START
        return int(value)

    def write_counter(self, name: str, value: int) -> None:
        if value < (current := self.read_counter(name)):
            raise InvalidCounterValue(name, current, value)
        self.connection.execute(
            build_upsert(
                self.dialect,
                counters,
                values={"name": name, "value": value},
                index_elements=["name"],
                update_columns=["value"],
            )
        )

    def allocate(self, name: str) -> int:
        self.connection.execute(
            build_insert_if_absent(
                self.dialect,
                counters,
                values={"name": name, "value": COUNTER_START},
                index_elements=["name"],
            )
        )
        stmt = (
            update(counters)
            .where(counters.c.name == name)
            .values(value=counters.c.value + 1)
            .returning(counters.c.value)
        )
        return int(self.connection.execute(stmt).scalar_one()) - 1
