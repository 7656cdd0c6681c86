"""Defines the KeyedStore adapter package.

Contains an in-memory implementation used by tests and demos, and an
SQLAlchemy implementation providing durable storage on SQLite or PostgreSQL.
"""

from .in_memory import InMemoryKeyedStore
from .sqlalchemy_store import SqlAlchemyKeyedStore

__all__ = [
    "InMemoryKeyedStore",
    "SqlAlchemyKeyedStore",
]
