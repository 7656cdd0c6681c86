"""Functional tests for ``schoolbus drivers``.

A transportation coordinator registers a driver, records incidents and asks
whether the driver may drive, all through the CLI against a migrated SQLite
file. Exit codes matter here: 0 for success/eligible, 1 for an unknown
driver, 2 for an ineligible one.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner, Result

from schoolbus.entrypoints.cli.main import schoolbus as schoolbus_cli
from tests.fixtures.datagen import BACKGROUND_CHECK, CHECK_TIME, LICENSE_EXPIRY

# pylint: disable=redefined-outer-name
# pylint: disable=magic-value-comparison


@pytest.fixture
def runner(sqlite_url_file: str) -> CliRunner:
    """CliRunner pointed at a migrated SQLite file, flight recorder off."""
    return CliRunner(
        env={"SCHOOLBUS_DB_URL": sqlite_url_file, "SCHOOLBUS_FLIGHT_RECORDER": "0"}
    )


def _last_stdout_line(result: Result) -> str:
    return result.stdout.strip().splitlines()[-1]


def _register(runner: CliRunner, name: str = "Ada Lovelace") -> Result:
    return runner.invoke(
        schoolbus_cli,
        [
            "drivers",
            "register",
            name,
            "--license-number",
            "DL-0001",
            "--license-expiry",
            str(LICENSE_EXPIRY),
            "--background-check",
            str(BACKGROUND_CHECK),
            "--qualification",
            "CDL-B",
            "--qualification",
            "S-endorsement",
        ],
    )


def _incident(runner: CliRunner, driver_id: int, severity: int) -> Result:
    return runner.invoke(
        schoolbus_cli,
        [
            "drivers",
            "record-incident",
            str(driver_id),
            "--description",
            "Ran a red light",
            "--severity",
            str(severity),
            "--timestamp",
            str(CHECK_TIME),
        ],
    )


def _check(runner: CliRunner, driver_id: int) -> Result:
    return runner.invoke(
        schoolbus_cli,
        ["drivers", "check-eligibility", str(driver_id), "--at", str(CHECK_TIME)],
    )


def test_coordinator_workflow(runner: CliRunner):
    """Register → show → incident → eligible → incident → ineligible."""

    # The coordinator registers a new driver and gets an ID back.
    result = _register(runner)
    assert result.exit_code == 0, result.output
    assert "Registered driver 1" in result.output
    assert _last_stdout_line(result) == "1"

    # IDs keep counting up.
    result = _register(runner, name="Grace Hopper")
    assert _last_stdout_line(result) == "2"

    # They look the driver up.
    result = runner.invoke(schoolbus_cli, ["drivers", "show", "1"])
    assert result.exit_code == 0, result.output
    assert "Ada Lovelace" in result.stdout
    assert "CDL-B, S-endorsement" in result.stdout
    assert "Safety score     : 100" in result.stdout

    # A serious incident costs 30 points; 70 is still acceptable.
    result = _incident(runner, 1, 8)
    assert result.exit_code == 0, result.output
    assert _last_stdout_line(result) == "1"

    result = _check(runner, 1)
    assert result.exit_code == 0, result.output
    assert "safety score acceptable : yes" in result.stdout
    assert "eligible                : yes" in result.stdout

    # A minor one takes the driver below the threshold.
    assert _incident(runner, 1, 2).exit_code == 0
    result = _check(runner, 1)
    assert result.exit_code == 2, result.output
    assert "safety score acceptable : no" in result.stdout
    assert "eligible                : no" in result.stdout
    assert "safety_score_acceptable" in result.output

    result = runner.invoke(schoolbus_cli, ["drivers", "show", "1"])
    assert "Safety score     : 65" in result.stdout


def test_license_update_and_deactivation(runner: CliRunner):
    """A renewed license and a deactivation both show up in the record."""
    _register(runner)

    result = runner.invoke(
        schoolbus_cli,
        [
            "drivers",
            "update-license",
            "1",
            "--license-number",
            "DL-2000",
            "--license-expiry",
            "1900000000",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Updated license for driver 1" in result.output

    result = runner.invoke(schoolbus_cli, ["drivers", "deactivate", "1"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(schoolbus_cli, ["drivers", "show", "1"])
    assert "DL-2000" in result.stdout
    assert "1900000000" in result.stdout
    assert "Active           : no" in result.stdout

    result = _check(runner, 1)
    assert result.exit_code == 2
    assert "active                  : no" in result.stdout

    result = runner.invoke(schoolbus_cli, ["drivers", "activate", "1"])
    assert result.exit_code == 0, result.output
    assert _check(runner, 1).exit_code == 0


@pytest.mark.parametrize(
    "args",
    [
        ["drivers", "show", "9"],
        ["drivers", "activate", "9"],
        ["drivers", "deactivate", "9"],
        ["drivers", "check-eligibility", "9"],
        ["drivers", "record-incident", "9", "--description", "x", "--severity", "3"],
        [
            "drivers",
            "update-license",
            "9",
            "--license-number",
            "DL-9",
            "--license-expiry",
            "1",
        ],
    ],
)
def test_unknown_driver_exits_1(runner: CliRunner, args: list[str]):
    """Every driver command reports a missing driver with exit code 1."""
    result = runner.invoke(schoolbus_cli, args)
    assert result.exit_code == 1, result.output
    assert "Driver 9 does not exist." in result.output


def test_registry_requires_database():
    """Without SCHOOLBUS_DB_URL the registry commands explain what to set."""
    result = CliRunner(
        env={"SCHOOLBUS_DB_URL": "", "SCHOOLBUS_FLIGHT_RECORDER": "0"}
    ).invoke(schoolbus_cli, ["drivers", "show", "1"])
    assert result.exit_code == 1
    assert "SCHOOLBUS_DB_URL is not set." in result.output
