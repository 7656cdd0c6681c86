"""Module defining Commands."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class RegisterDriver(Command):
    """Command to register a new driver."""

    name: str
    license_number: str
    license_expiry: int
    qualifications: tuple[str, ...]
    last_background_check: int


@dataclass(frozen=True)
class UpdateDriverLicense(Command):
    """Command to replace a driver's license number and expiry."""

    driver_id: int
    license_number: str
    license_expiry: int


@dataclass(frozen=True)
class RecordSafetyIncident(Command):
    """Command to record a safety incident against a driver."""

    driver_id: int
    description: str
    severity: int
    timestamp: int


@dataclass(frozen=True)
class ActivateDriver(Command):
    """Command to mark a driver as active."""

    driver_id: int


@dataclass(frozen=True)
class DeactivateDriver(Command):
    """Command to mark a driver as inactive."""

    driver_id: int
