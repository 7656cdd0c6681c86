"""In-memory KeyedStore implementation for testing purposes."""

import copy

from schoolbus.interfaces.keyed_store import (
    COUNTER_START,
    DuplicateRecordKey,
    InvalidCounterValue,
    KeyedStore,
    Record,
    StoreKey,
)

Snapshot = tuple[dict[StoreKey, Record], dict[str, int]]


class InMemoryKeyedStore(KeyedStore):
    """In-memory KeyedStore implementation for testing purposes.

    Records are deep-copied on the way in and out so callers never share
    mutable state with the store. ``for_update`` is accepted and ignored:
    there is only ever one writer.

    Note: This implementation is not thread-safe and is intended
    solely for use in single-threaded test scenarios
    """

    def __init__(self):
        self.records: dict[StoreKey, Record] = {}
        self.counters: dict[str, int] = {}

    # --- records ---

    def get(self, key: StoreKey, *, for_update: bool = False) -> Record | None:
        if (record := self.records.get(key)) is None:
            return None
        return copy.deepcopy(record)

    def set(self, key: StoreKey, record: Record) -> None:
        self.records[key] = copy.deepcopy(record)

    def add(self, key: StoreKey, record: Record) -> None:
        if key in self.records:
            raise DuplicateRecordKey(key)
        self.records[key] = copy.deepcopy(record)

    # --- counters ---

    def read_counter(self, name: str) -> int:
        return self.counters.get(name, COUNTER_START)

    def write_counter(self, name: str, value: int) -> None:
        current = self.read_counter(name)
        if value < current:
            raise InvalidCounterValue(name, current, value)
        self.counters[name] = value

    def allocate(self, name: str) -> int:
        value = self.read_counter(name)
        self.counters[name] = value + 1
        return value

    # --- inspection ---

    def snapshot(self) -> Snapshot:
        """Return a deep copy of all records and counters."""
        return copy.deepcopy(self.records), dict(self.counters)

    def restore(self, snapshot: Snapshot) -> None:
        """Replace all records and counters with a previous `snapshot`."""
        records, counters = snapshot
        self.records = copy.deepcopy(records)
        self.counters = dict(counters)
