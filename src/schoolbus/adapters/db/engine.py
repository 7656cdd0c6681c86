"""Engine factory.

SQLite engines get two extras on top of ``create_engine``:

- connection PRAGMAs for a file shared by several CLI processes
  (`SQLITE_PRAGMAS`);
- transactions opened with ``BEGIN IMMEDIATE``. pysqlite would otherwise run
  reads outside any transaction, letting two processes read the same row and
  both write it back. With the write lock taken up front, a second unit of
  work waits (up to the busy timeout) until the first has finished.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Connection, Engine

SQLITE_BUSY_TIMEOUT_MS = 5000
SQLITE_PRAGMAS = (
    "foreign_keys=ON",
    "journal_mode=WAL",
    "synchronous=NORMAL",
    f"busy_timeout={SQLITE_BUSY_TIMEOUT_MS}",
)


def is_sqlite(url: str | URL) -> bool:
    """True if ``url`` uses the SQLite backend (any driver)."""
    return make_url(str(url)).get_backend_name() == "sqlite"


def _on_sqlite_connect(dbapi_conn: SQLiteConnection, conn_record) -> None:  # pylint: disable=unused-argument
    cur = dbapi_conn.cursor()
    for pragma in SQLITE_PRAGMAS:
        cur.execute(f"PRAGMA {pragma};")
    cur.close()
    # SQLAlchemy emits BEGIN itself, see _on_sqlite_begin
    dbapi_conn.isolation_level = None


def _on_sqlite_begin(conn: Connection) -> None:
    conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create the Engine for ``url``; every SCHOOLBUS engine comes from here."""
    engine = create_engine(url, echo=echo)
    if is_sqlite(url):
        event.listen(engine, "connect", _on_sqlite_connect)
        event.listen(engine, "begin", _on_sqlite_begin)
    return engine
