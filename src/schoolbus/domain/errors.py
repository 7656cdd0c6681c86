"""Domain-layer error definitions."""

from enum import IntEnum

# ============================================================================
#                           General domain errors
# ============================================================================


class ErrorCode(IntEnum):
    """Numeric discriminants reported for failed registry operations."""

    NOT_FOUND = 1


class DomainError(Exception):
    """Base class for domain-layer errors."""

    code: ErrorCode


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    code = ErrorCode.NOT_FOUND


# ============================================================================
#                       Driver Registry related errors
# ============================================================================


class DriverNotFoundError(NotFoundError):
    """Raised when an operation references a driver that is not registered."""

    def __init__(self, driver_id: int) -> None:
        super().__init__(f"Driver {driver_id} does not exist.")
        self.driver_id = driver_id
