"""Module defining Queries.

Queries are read-only requests. Their handlers never commit.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Query:
    """Base class for all queries."""


@dataclass(frozen=True)
class GetDriver(Query):
    """Fetch a driver by ID."""

    driver_id: int


@dataclass(frozen=True)
class GetSafetyIncident(Query):
    """Fetch a safety incident by ID."""

    incident_id: int


@dataclass(frozen=True)
class CheckDriverEligibility(Query):
    """Check whether a driver may drive at ``current_time`` (Unix seconds)."""

    driver_id: int
    current_time: int


@dataclass(frozen=True)
class ExplainDriverEligibility(Query):
    """Evaluate each eligibility predicate for a driver at ``current_time``."""

    driver_id: int
    current_time: int
