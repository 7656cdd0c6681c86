"""Keyed store schema.

Defines the ``keyed_records`` and ``counters`` tables backing the SQL
keyed store.

Constraints (enforced here):

| Constraint                      | Purpose                                  |
|---------------------------------|------------------------------------------|
| PK(map_name, record_key)        | one record per composite key per map     |
| PK(name)                        | one value per counter                    |
| CHECK(value >= 1)               | counters start at 1                      |
"""

from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    PrimaryKeyConstraint,
    String,
    Table,
    text,
)

from schoolbus.adapters.db.metadata import metadata
from schoolbus.adapters.db.sa_types import PORTABLE_JSON, UTCDateTime

__all__ = ["keyed_records", "counters"]

keyed_records = Table(
    "keyed_records",
    metadata,
    Column(
        "map_name",
        String(64),
        nullable=False,
        comment="Logical map the record belongs to (e.g., 'drivers').",
    ),
    Column(
        "record_key",
        String(512),
        nullable=False,
        comment="Canonical JSON rendering of the composite key fields.",
    ),
    Column(
        "value",
        PORTABLE_JSON,
        nullable=False,
        comment="Record value (JSON object).",
    ),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="UTC timestamp of the last write.",
    ),
    PrimaryKeyConstraint("map_name", "record_key"),
    comment="Composite-keyed records. Full replace on every write.",
)

counters = Table(
    "counters",
    metadata,
    Column(
        "name",
        String(64),
        nullable=False,
        comment="Counter name (e.g., 'next_driver_id').",
    ),
    Column(
        "value",
        BigInteger,
        nullable=False,
        comment="Next value to hand out.",
    ),
    PrimaryKeyConstraint("name"),
    CheckConstraint("value >= 1", name="positive_value"),
    comment="Named monotonic counters used to allocate IDs.",
)
