"""``schoolbus drivers``: register and maintain drivers, check eligibility.

Every subcommand sends one command or query through the message bus built by
`schoolbus.bootstrap`. Identifiers and verdicts are printed to stdout; status
lines go to stderr.

Exit codes:
  - 0: success (and, for ``check-eligibility``, the driver is eligible)
  - 1: the driver does not exist
  - 2: ``check-eligibility`` found the driver ineligible
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

import click
import click_extra as clickx

from schoolbus.bootstrap import bootstrap
from schoolbus.domain.errors import DomainError, DriverNotFoundError
from schoolbus.service_layer import commands, queries

from .helpers import error, success, warn
from .helpers.db_url import require_db_url

if TYPE_CHECKING:
    from schoolbus.domain.driver import Driver
    from schoolbus.domain.eligibility import EligibilityReport
    from schoolbus.service_layer.messagebus import MessageBus

P = ParamSpec("P")
R = TypeVar("R")

INELIGIBLE_EXIT_CODE = 2


def _now() -> int:
    return int(time.time())


def _bus(ctx: click.Context) -> MessageBus:
    """Return the message bus for this invocation, bootstrapping it once."""
    obj = ctx.ensure_object(dict)
    if "bus" not in obj:
        obj["bus"] = bootstrap(require_db_url()).message_bus
    return obj["bus"]


def exits_on_domain_error(fn: Callable[P, R]) -> Callable[P, R]:
    """Report a `DomainError` as an error line and exit with its code."""

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return fn(*args, **kwargs)
        except DomainError as e:
            error(str(e))
            raise click.exceptions.Exit(int(e.code)) from e

    return wrapper


def _format_driver(driver_id: int, driver: Driver) -> str:
    rows: list[tuple[str, Any]] = [
        ("ID", driver_id),
        ("Name", driver.name),
        ("License", driver.license_number),
        ("Expires", driver.license_expiry),
        ("Qualifications", ", ".join(driver.qualifications) or "-"),
        ("Background check", driver.last_background_check),
        ("Safety score", driver.safety_score),
        ("Active", "yes" if driver.active else "no"),
    ]
    width = max(len(label) for label, _ in rows)
    return "\n".join(f"{label:<{width}} : {value}" for label, value in rows)


def _format_report(report: EligibilityReport) -> str:
    checks = (
        ("license valid", report.license_valid),
        ("background check valid", report.background_check_valid),
        ("safety score acceptable", report.safety_score_acceptable),
        ("active", report.is_active),
    )
    width = max(len(label) for label, _ in checks)
    lines = [f"{label:<{width}} : {'yes' if ok else 'no'}" for label, ok in checks]
    lines.append(f"{'eligible':<{width}} : {'yes' if report.eligible else 'no'}")
    return "\n".join(lines)


@click.group(cls=clickx.ExtraGroup)
def drivers() -> None:
    """Driver registry commands."""


@drivers.command()
@click.argument("name")
@click.option("--license-number", required=True, help="License number.")
@click.option(
    "--license-expiry",
    type=int,
    required=True,
    help="License expiry (Unix seconds).",
)
@click.option(
    "--background-check",
    "last_background_check",
    type=int,
    required=True,
    help="Time of the last background check (Unix seconds).",
)
@click.option(
    "--qualification",
    "qualifications",
    multiple=True,
    help="Qualification tag. Repeatable, order is kept.",
)
@click.pass_context
def register(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    name: str,
    license_number: str,
    license_expiry: int,
    last_background_check: int,
    qualifications: tuple[str, ...],
) -> None:
    """Register a new driver and print its ID."""
    driver_id = _bus(ctx).handle(
        commands.RegisterDriver(
            name=name,
            license_number=license_number,
            license_expiry=license_expiry,
            qualifications=qualifications,
            last_background_check=last_background_check,
        )
    )
    success(f"Registered driver {driver_id}")
    click.echo(driver_id)


@drivers.command("update-license")
@click.argument("driver_id", type=int)
@click.option("--license-number", required=True, help="New license number.")
@click.option(
    "--license-expiry",
    type=int,
    required=True,
    help="New license expiry (Unix seconds).",
)
@click.pass_context
@exits_on_domain_error
def update_license(
    ctx: click.Context, driver_id: int, license_number: str, license_expiry: int
) -> None:
    """Replace a driver's license number and expiry."""
    _bus(ctx).handle(
        commands.UpdateDriverLicense(
            driver_id=driver_id,
            license_number=license_number,
            license_expiry=license_expiry,
        )
    )
    success(f"Updated license for driver {driver_id}")


@drivers.command("record-incident")
@click.argument("driver_id", type=int)
@click.option("--description", required=True, help="What happened.")
@click.option("--severity", type=int, required=True, help="Incident severity.")
@click.option(
    "--timestamp",
    type=int,
    default=None,
    help="When it happened (Unix seconds). Defaults to now.",
)
@click.pass_context
@exits_on_domain_error
def record_incident(
    ctx: click.Context,
    driver_id: int,
    description: str,
    severity: int,
    timestamp: int | None,
) -> None:
    """Record a safety incident and print its ID."""
    incident_id = _bus(ctx).handle(
        commands.RecordSafetyIncident(
            driver_id=driver_id,
            description=description,
            severity=severity,
            timestamp=_now() if timestamp is None else timestamp,
        )
    )
    success(f"Recorded incident {incident_id} for driver {driver_id}")
    click.echo(incident_id)


@drivers.command("check-eligibility")
@click.argument("driver_id", type=int)
@click.option(
    "--at",
    "at",
    type=int,
    default=None,
    help="Time to check against (Unix seconds). Defaults to now.",
)
@click.pass_context
@exits_on_domain_error
def check_eligibility(ctx: click.Context, driver_id: int, at: int | None) -> None:
    """Show each eligibility check; exit 2 if the driver is not eligible."""
    report: EligibilityReport = _bus(ctx).handle(
        queries.ExplainDriverEligibility(
            driver_id=driver_id, current_time=_now() if at is None else at
        )
    )
    click.echo(_format_report(report))
    if not report.eligible:
        warn(
            f"Driver {driver_id} is not eligible: {', '.join(report.failed_checks())}"
        )
        ctx.exit(INELIGIBLE_EXIT_CODE)


@drivers.command()
@click.argument("driver_id", type=int)
@click.pass_context
@exits_on_domain_error
def show(ctx: click.Context, driver_id: int) -> None:
    """Show a driver's record."""
    driver = _bus(ctx).handle(queries.GetDriver(driver_id=driver_id))
    if driver is None:
        raise DriverNotFoundError(driver_id)
    click.echo(_format_driver(driver_id, driver))


@drivers.command()
@click.argument("driver_id", type=int)
@click.pass_context
@exits_on_domain_error
def activate(ctx: click.Context, driver_id: int) -> None:
    """Mark a driver as active."""
    _bus(ctx).handle(commands.ActivateDriver(driver_id=driver_id))
    success(f"Driver {driver_id} is active")


@drivers.command()
@click.argument("driver_id", type=int)
@click.pass_context
@exits_on_domain_error
def deactivate(ctx: click.Context, driver_id: int) -> None:
    """Mark a driver as inactive."""
    _bus(ctx).handle(commands.DeactivateDriver(driver_id=driver_id))
    success(f"Driver {driver_id} is inactive")
