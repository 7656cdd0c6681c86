"""Package for repository implementations."""

from .keyed import DriverRepository, KeyedRepository, SafetyIncidentRepository

__all__ = ["DriverRepository", "KeyedRepository", "SafetyIncidentRepository"]
