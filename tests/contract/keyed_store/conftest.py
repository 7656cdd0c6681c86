"""Pytest fixtures for KeyedStore contract tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from schoolbus.adapters.keyed_store import InMemoryKeyedStore, SqlAlchemyKeyedStore
from schoolbus.interfaces.keyed_store import KeyedStore

ENGINE_FIXTURES = {
    "sql_memory": "sqlite_engine_memory",
    "sql_file": "sqlite_engine_file",
    "postgres": "postgres_engine",
}


@pytest.fixture(params=["memory", "sql_memory", "sql_file", "postgres"])
def keyed_store(request: pytest.FixtureRequest) -> Iterator[KeyedStore]:
    """Return a fresh keyed store for the requested backend.

    Current params:
      - `"memory"` → `InMemoryKeyedStore`
      - `"sql_memory"` → `SqlAlchemyKeyedStore` on in-memory SQLite
      - `"sql_file"` → `SqlAlchemyKeyedStore` on a migrated SQLite file
      - `"postgres"` → `SqlAlchemyKeyedStore` on Postgres (skipped without Docker)

    SQL stores run inside one connection whose transaction is rolled back when
    the test ends. Engines are requested lazily so the SQLite variants do not
    depend on Docker.
    """
    if request.param == "memory":
        yield InMemoryKeyedStore()
        return

    engine = request.getfixturevalue(ENGINE_FIXTURES[request.param])
    with engine.connect() as connection:
        yield SqlAlchemyKeyedStore(connection)
