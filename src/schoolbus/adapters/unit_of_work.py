"""Units of Work for SCHOOLBUS.

Provides a SQLAlchemy-backed unit of work (one connection and transaction per
``with`` block) and an in-memory one for demos and tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from schoolbus.adapters.keyed_store import InMemoryKeyedStore, SqlAlchemyKeyedStore
from schoolbus.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.connection: Connection

    def __enter__(self):
        self.connection = self.engine.connect()
        self.store = SqlAlchemyKeyedStore(self.connection)
        return super().__enter__()

    def __exit__(self, *args):
        super().__exit__(*args)
        self.connection.close()

    def commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of Work over an InMemoryKeyedStore.

    The store is snapshotted when a ``with`` block starts and on every commit;
    rollback puts the last snapshot back, so writes that were never committed
    disappear just as they would from a database.
    """

    def __init__(self, store: InMemoryKeyedStore | None = None):
        self.store = store if store is not None else InMemoryKeyedStore()
        self.committed = False
        self._committed_state = self.store.snapshot()

    def __enter__(self):
        self._committed_state = self.store.snapshot()
        return super().__enter__()

    def commit(self):
        self._committed_state = self.store.snapshot()
        self.committed = True

    def rollback(self):
        self.store.restore(self._committed_state)
