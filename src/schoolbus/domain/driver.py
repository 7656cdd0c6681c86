"""Driver and safety incident records.

Both are immutable value objects. State changes produce new instances via
the ``with_*`` helpers so that callers merge only the fields they target and
everything else is carried over unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .safety import DEFAULT_SAFETY_SCORE, apply_penalty, penalty_for

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True, slots=True)
class Driver:
    """A credentialed bus driver.

    Conventions:
      - `license_expiry` and `last_background_check` are Unix timestamps (seconds).
      - `qualifications` keeps the order in which the tags were supplied.
      - `safety_score` is within [0, 100].
    """

    name: str
    license_number: str
    license_expiry: int
    qualifications: tuple[str, ...]
    last_background_check: int
    active: bool = True
    safety_score: int = DEFAULT_SAFETY_SCORE

    def __post_init__(self) -> None:
        object.__setattr__(self, "qualifications", tuple(self.qualifications))

    # --- Transitions ---

    def with_license(self, license_number: str, license_expiry: int) -> Driver:
        """Return a copy carrying the new license number and expiry."""
        return replace(
            self, license_number=license_number, license_expiry=license_expiry
        )

    def with_active(self, active: bool) -> Driver:
        """Return a copy with the given active flag."""
        return replace(self, active=active)

    def after_incident(self, severity: int) -> Driver:
        """Return a copy whose safety score has been reduced for an incident."""
        penalty = penalty_for(severity)
        return replace(self, safety_score=apply_penalty(self.safety_score, penalty))

    # --- Record mapping ---

    def to_record(self) -> dict[str, Any]:
        """Serialize to a plain, JSON-compatible record."""
        return {
            "name": self.name,
            "license_number": self.license_number,
            "license_expiry": self.license_expiry,
            "qualifications": list(self.qualifications),
            "active": self.active,
            "safety_score": self.safety_score,
            "last_background_check": self.last_background_check,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Driver:
        """Build a driver from a stored record."""
        return cls(
            name=record["name"],
            license_number=record["license_number"],
            license_expiry=record["license_expiry"],
            qualifications=tuple(record.get("qualifications", ())),
            last_background_check=record["last_background_check"],
            active=record["active"],
            safety_score=record["safety_score"],
        )


@dataclass(frozen=True, slots=True)
class SafetyIncident:
    """A recorded safety incident for a driver."""

    driver_id: int
    timestamp: int
    description: str
    severity: int
    resolved: bool = False

    def to_record(self) -> dict[str, Any]:
        """Serialize to a plain, JSON-compatible record."""
        return {
            "driver_id": self.driver_id,
            "timestamp": self.timestamp,
            "description": self.description,
            "severity": self.severity,
            "resolved": self.resolved,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> SafetyIncident:
        """Build an incident from a stored record."""
        return cls(
            driver_id=record["driver_id"],
            timestamp=record["timestamp"],
            description=record["description"],
            severity=record["severity"],
            resolved=record["resolved"],
        )
