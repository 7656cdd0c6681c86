"""Driver Registry handlers.

Every handler looks the driver up before writing anything, so a missing
driver raises `DriverNotFoundError` with the store left untouched and the
unit of work not committed. Drivers that are about to be written back are
loaded with `for_update=True` so a concurrent writer cannot slip in between
the read and the save.
"""

import logging
from collections.abc import Callable

from schoolbus.domain.driver import Driver, SafetyIncident
from schoolbus.domain.eligibility import EligibilityReport, evaluate_eligibility
from schoolbus.domain.errors import DriverNotFoundError
from schoolbus.interfaces.unit_of_work import AbstractUnitOfWork
from schoolbus.service_layer import commands, queries
from schoolbus.service_layer import repositories as repos

logger = logging.getLogger(__name__)


def _load_driver(
    drivers: repos.DriverRepository, driver_id: int, *, for_update: bool = False
) -> Driver:
    if (driver := drivers.get(driver_id, for_update=for_update)) is None:
        raise DriverNotFoundError(driver_id)
    return driver


# ============================================================================
#                               Commands
# ============================================================================


def register_driver(cmd: commands.RegisterDriver, uow: AbstractUnitOfWork) -> int:
    """Register a new driver; returns the allocated driver ID."""

    driver = Driver(
        name=cmd.name,
        license_number=cmd.license_number,
        license_expiry=cmd.license_expiry,
        qualifications=cmd.qualifications,
        last_background_check=cmd.last_background_check,
    )

    with uow:
        driver_id = repos.DriverRepository(uow.store).add(driver)
        uow.commit()

    logger.info("Registered driver %s (%s)", driver_id, cmd.license_number)
    return driver_id


def update_driver_license(
    cmd: commands.UpdateDriverLicense, uow: AbstractUnitOfWork
) -> bool:
    """Replace a driver's license number and expiry, keeping all other fields."""

    with uow:
        drivers = repos.DriverRepository(uow.store)
        driver = _load_driver(drivers, cmd.driver_id, for_update=True)
        drivers.save(
            cmd.driver_id, driver.with_license(cmd.license_number, cmd.license_expiry)
        )
        uow.commit()

    logger.info(
        "Updated license for driver %s: %s expires %s",
        cmd.driver_id,
        cmd.license_number,
        cmd.license_expiry,
    )
    return True


def record_safety_incident(
    cmd: commands.RecordSafetyIncident, uow: AbstractUnitOfWork
) -> int:
    """Record an incident and deduct the tiered penalty; returns the incident ID."""

    with uow:
        drivers = repos.DriverRepository(uow.store)
        incidents = repos.SafetyIncidentRepository(uow.store)
        driver = _load_driver(drivers, cmd.driver_id, for_update=True)

        incident_id = incidents.allocate_id()
        incidents.insert(
            incident_id,
            SafetyIncident(
                driver_id=cmd.driver_id,
                timestamp=cmd.timestamp,
                description=cmd.description,
                severity=cmd.severity,
            ),
        )
        updated = driver.after_incident(cmd.severity)
        drivers.save(cmd.driver_id, updated)
        uow.commit()

    logger.info(
        "Recorded incident %s for driver %s (severity %s); safety score %s -> %s",
        incident_id,
        cmd.driver_id,
        cmd.severity,
        driver.safety_score,
        updated.safety_score,
    )
    return incident_id


def _set_driver_active(driver_id: int, active: bool, uow: AbstractUnitOfWork) -> bool:
    with uow:
        drivers = repos.DriverRepository(uow.store)
        driver = _load_driver(drivers, driver_id, for_update=True)
        if driver.active == active:
            logger.debug("Driver %s already active=%s; noop", driver_id, active)
            return True
        drivers.save(driver_id, driver.with_active(active))
        uow.commit()

    logger.info("Driver %s active=%s", driver_id, active)
    return True


def activate_driver(cmd: commands.ActivateDriver, uow: AbstractUnitOfWork) -> bool:
    """Mark a driver as active."""
    return _set_driver_active(cmd.driver_id, True, uow)


def deactivate_driver(cmd: commands.DeactivateDriver, uow: AbstractUnitOfWork) -> bool:
    """Mark a driver as inactive."""
    return _set_driver_active(cmd.driver_id, False, uow)


# ============================================================================
#                               Queries
# ============================================================================


def get_driver(query: queries.GetDriver, uow: AbstractUnitOfWork) -> Driver | None:
    """Return the driver, or None if it does not exist."""
    with uow:
        return repos.DriverRepository(uow.store).get(query.driver_id)


def get_safety_incident(
    query: queries.GetSafetyIncident, uow: AbstractUnitOfWork
) -> SafetyIncident | None:
    """Return the incident, or None if it does not exist."""
    with uow:
        return repos.SafetyIncidentRepository(uow.store).get(query.incident_id)


def explain_driver_eligibility(
    query: queries.ExplainDriverEligibility, uow: AbstractUnitOfWork
) -> EligibilityReport:
    """Evaluate every eligibility predicate for a driver."""
    with uow:
        driver = _load_driver(repos.DriverRepository(uow.store), query.driver_id)

    report = evaluate_eligibility(driver, query.current_time)
    logger.debug(
        "Eligibility for driver %s at %s: %s", query.driver_id, query.current_time, report
    )
    return report


def check_driver_eligibility(
    query: queries.CheckDriverEligibility, uow: AbstractUnitOfWork
) -> bool:
    """Return True if the driver is eligible to drive at the given time."""
    return explain_driver_eligibility(
        queries.ExplainDriverEligibility(query.driver_id, query.current_time), uow
    ).eligible


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.RegisterDriver: register_driver,
    commands.UpdateDriverLicense: update_driver_license,
    commands.RecordSafetyIncident: record_safety_incident,
    commands.ActivateDriver: activate_driver,
    commands.DeactivateDriver: deactivate_driver,
}

QUERY_HANDLERS: dict[type, Callable[..., object]] = {
    queries.GetDriver: get_driver,
    queries.GetSafetyIncident: get_safety_incident,
    queries.CheckDriverEligibility: check_driver_eligibility,
    queries.ExplainDriverEligibility: explain_driver_eligibility,
}
