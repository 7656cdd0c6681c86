"""Interfaces for the keyed record store.

Defines the `KeyedStore` abstraction shared by the driver registry and the
other transportation modules: named maps of composite-keyed records, plus
named counters used to hand out monotonically increasing numeric IDs.
"""

from __future__ import annotations

import abc
import json
from dataclasses import dataclass
from typing import Any, TypeAlias

from .errors import InvalidStoreKey

Record: TypeAlias = dict[str, Any]

COUNTER_START = 1


@dataclass(frozen=True)
class StoreKey:
    """Composite key addressing one record within a named map.

    ``fields`` holds ``(name, value)`` pairs sorted by name, so two keys built
    from the same named values compare equal regardless of argument order.
    """

    map_name: str  # e.g. "drivers"
    fields: tuple[tuple[str, Any], ...]

    @classmethod
    def of(cls, map_name: str, **fields: Any) -> StoreKey:
        """Build a key, e.g. ``StoreKey.of("drivers", driver_id=1)``.

        Raises:
            InvalidStoreKey: If no key fields are given.
        """
        if not fields:
            raise InvalidStoreKey(map_name, "at least one key field is required")
        return cls(map_name=map_name, fields=tuple(sorted(fields.items())))

    def as_dict(self) -> dict[str, Any]:
        """Return the key fields as a dict."""
        return dict(self.fields)

    def canonical(self) -> str:
        """Canonical string form of the key fields (compact, sorted JSON)."""
        return json.dumps(self.as_dict(), sort_keys=True, separators=(",", ":"))


class KeyedStore(abc.ABC):
    """Composite-key record storage with named monotonic counters.

    Writers that run concurrently (separate processes on one database) are
    kept apart by two operations: `allocate` hands out each counter value
    exactly once, and ``get(..., for_update=True)`` holds the record until the
    transaction ends so a read-merge-set cannot lose another writer's update.
    """

    @abc.abstractmethod
    def get(self, key: StoreKey, *, for_update: bool = False) -> Record | None:
        """Retrieve the record stored under a key.

        Args:
            key: The composite key to look up.
            for_update: Lock the record against other writers until the
                surrounding transaction ends.

        Returns:
            Record | None: A copy of the stored record, or ``None`` if absent.
        """

    @abc.abstractmethod
    def set(self, key: StoreKey, record: Record) -> None:
        """Store a record under a key, replacing any existing value.

        Args:
            key: The composite key to write.
            record: The full record value. Partial updates are the caller's
                job: read, merge, then set.
        """

    @abc.abstractmethod
    def add(self, key: StoreKey, record: Record) -> None:
        """Store a record under a key that must not exist yet.

        Raises:
            DuplicateRecordKey: If a record is already stored under ``key``.
        """

    @abc.abstractmethod
    def read_counter(self, name: str) -> int:
        """Read the current value of a named counter.

        Counters that have never been written read as ``COUNTER_START``.

        Args:
            name: The counter name, e.g. ``"next_driver_id"``.

        Returns:
            int: The current counter value.
        """

    @abc.abstractmethod
    def write_counter(self, name: str, value: int) -> None:
        """Write a new value for a named counter.

        Args:
            name: The counter name.
            value: The new value.

        Raises:
            InvalidCounterValue: If ``value`` is lower than the current value.
        """

    @abc.abstractmethod
    def allocate(self, name: str) -> int:
        """Return the counter's current value and advance it by one, atomically.

        Two callers never receive the same value, even from separate
        connections, as long as each commits or rolls back its transaction.

        Args:
            name: The counter name.

        Returns:
            int: The allocated value (``COUNTER_START`` for a fresh counter).
        """
