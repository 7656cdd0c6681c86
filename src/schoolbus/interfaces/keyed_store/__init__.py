"""SCHOOLBUS Keyed Store Interface Package"""

from .errors import (
    DuplicateRecordKey,
    InvalidCounterValue,
    InvalidStoreKey,
    KeyedStoreError,
)
from .keyed_store import (
    COUNTER_START,
    KeyedStore,
    Record,
    StoreKey,
)

__all__ = [
    "COUNTER_START",
    "DuplicateRecordKey",
    "InvalidCounterValue",
    "InvalidStoreKey",
    "KeyedStore",
    "KeyedStoreError",
    "Record",
    "StoreKey",
]
