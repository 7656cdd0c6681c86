"""Exceptions for keyed store operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .keyed_store import StoreKey


class KeyedStoreError(Exception):
    """Base class for keyed store errors."""


class InvalidStoreKey(KeyedStoreError):
    """A store key is malformed.

    Attributes:
        map_name (str): The map the key was built for.
        reason (str): Why the key was rejected.
    """

    def __init__(self, map_name: str, reason: str):
        super().__init__(f"Invalid key for map '{map_name}': {reason}")
        self.map_name = map_name
        self.reason = reason


class InvalidCounterValue(KeyedStoreError):
    """Counters only move forward.

    Attributes:
        name (str): The counter name.
        current (int): The counter's current value.
        value (int): The rejected value.
    """

    def __init__(self, name: str, current: int, value: int):
        super().__init__(
            f"Counter '{name}' cannot move from {current} to {value}; counters are monotonic."
        )
        self.name = name
        self.current = current
        self.value = value


class DuplicateRecordKey(KeyedStoreError):
    """A record already exists under a key that was meant to be new.

    Attributes:
        key (StoreKey): The key that is already taken.
    """

    def __init__(self, key: StoreKey):
        super().__init__(
            f"Record {key.canonical()} already exists in map '{key.map_name}'"
        )
        self.key = key
