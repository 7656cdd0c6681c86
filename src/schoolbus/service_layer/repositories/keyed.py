"""Module for repositories backed by the keyed store."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, Protocol, Self, TypeVar

from schoolbus.domain.driver import Driver, SafetyIncident
from schoolbus.interfaces.keyed_store import KeyedStore, StoreKey

# pylint: disable=too-few-public-methods


class RecordMapped(Protocol):
    """Anything that converts to and from a plain store record."""

    def to_record(self) -> dict[str, Any]:
        """Serialize to a store record."""
        ...  # pylint: disable=unnecessary-ellipsis

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        """Build from a store record."""
        ...  # pylint: disable=unnecessary-ellipsis


# ============================================================================
#                      Generic Keyed Repository
# ============================================================================


T = TypeVar("T", bound=RecordMapped)


class KeyedRepository(Generic[T]):
    """Repository for records kept in one map of a keyed store.

    Entities are addressed by a numeric ID handed out by a named counter.
    ``allocate_id()`` takes an ID off the counter atomically and ``insert()``
    refuses to overwrite an existing record, so two units of work can never
    end up sharing an ID.
    """

    MAP_NAME: ClassVar[str]
    KEY_FIELD: ClassVar[str]
    COUNTER_NAME: ClassVar[str]
    RECORD_CLASS: ClassVar[type]

    def __init__(self, store: KeyedStore) -> None:
        self.store = store

    def key(self, entity_id: int) -> StoreKey:
        """Return the store key for an entity ID."""
        return StoreKey.of(self.MAP_NAME, **{self.KEY_FIELD: entity_id})

    # --- Loads ---

    def get(self, entity_id: int, *, for_update: bool = False) -> T | None:
        """Get an entity by ID, or None if it does not exist.

        Pass ``for_update=True`` when the entity is about to be saved back; the
        record then stays locked until the unit of work ends.
        """
        record = self.store.get(self.key(entity_id), for_update=for_update)
        if record is None:
            return None
        return self.RECORD_CLASS.from_record(record)

    # --- ID allocation ---

    def next_id(self) -> int:
        """Return the ID the next allocation will hand out, without taking it."""
        return self.store.read_counter(self.COUNTER_NAME)

    def allocate_id(self) -> int:
        """Take the next ID off the counter."""
        return self.store.allocate(self.COUNTER_NAME)

    # --- Saves ---

    def insert(self, entity_id: int, entity: T) -> None:
        """Write a new entity under ``entity_id``.

        Raises:
            DuplicateRecordKey: If a record already exists under that ID.
        """
        self.store.add(self.key(entity_id), entity.to_record())

    def add(self, entity: T) -> int:
        """Allocate an ID and write the entity under it; returns the ID."""
        entity_id = self.allocate_id()
        self.insert(entity_id, entity)
        return entity_id

    def save(self, entity_id: int, entity: T) -> None:
        """Merge an updated entity into its stored record.

        Fields present in the stored record but unknown to the entity type are
        kept as they are.
        """
        key = self.key(entity_id)
        existing = self.store.get(key, for_update=True) or {}
        self.store.set(key, {**existing, **entity.to_record()})


# ============================================================================
#                      Driver Registry Repositories
# ============================================================================


class DriverRepository(KeyedRepository[Driver]):
    """Drivers keyed by ``driver_id``."""

    MAP_NAME = "drivers"
    KEY_FIELD = "driver_id"
    COUNTER_NAME = "next_driver_id"
    RECORD_CLASS = Driver


class SafetyIncidentRepository(KeyedRepository[SafetyIncident]):
    """Safety incidents keyed by ``incident_id``."""

    MAP_NAME = "safety_incidents"
    KEY_FIELD = "incident_id"
    COUNTER_NAME = "next_incident_id"
    RECORD_CLASS = SafetyIncident
