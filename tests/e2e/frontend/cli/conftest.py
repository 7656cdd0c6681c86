"""Fixtures for end-to-end CLI logging tests.

The `log-demo` command below is only registered while a test runs. It logs
one message per level on a project logger and a few on a third-party logger,
which is enough to observe console filtering, per-logger overrides and what
the flight recorder writes to disk.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from schoolbus.entrypoints.cli.main import schoolbus

# pylint: disable=redefined-outer-name

DEMO_LOGGER = "schoolbus.demo"
THIRD_PARTY_LOGGER = "some.thirdparty"


@click.command()
def log_demo():
    """Log a fixed sequence of messages, ending with a DEBUG line."""
    demo = logging.getLogger(DEMO_LOGGER)
    third_party = logging.getLogger(THIRD_PARTY_LOGGER)

    demo.debug("This is a debug-level test message.")
    demo.info("This is an info-level test message.")
    demo.warning("This is a warning-level test message.")
    demo.error("This is an error-level test message.")
    demo.critical("This is a critical-level test message.")
    third_party.debug("This is a debug-level third-party test message.")
    third_party.info("This is an info-level third-party test message.")
    third_party.warning("This is a warning-level third-party test message.")
    # only reaches the log file on a forced flush
    demo.debug("This is a final debug-level test message.")


def _unregister(group: click.Group, name: str) -> None:
    # click-extra groups also list commands per help section
    group.commands.pop(name, None)
    for section in [getattr(group, "_default_section", None), *getattr(group, "_sections", [])]:
        if section is not None:
            getattr(section, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Make `schoolbus log-demo` available for one test."""
    schoolbus.add_command(log_demo, name="log-demo")
    yield
    _unregister(schoolbus, "log-demo")


@pytest.fixture
def runner():
    """CliRunner with no SCHOOLBUS_* settings leaking in from the shell."""
    return CliRunner(
        env={
            "SCHOOLBUS_LOG_PATH": None,
            "SCHOOLBUS_LOGGER_LEVELS": None,
            "SCHOOLBUS_FLIGHT_RECORDER": None,
            "SCHOOLBUS_FORCE_FLUSH": None,
        }
    )


@pytest.fixture
def fs(runner):
    """Run the test inside a fresh temporary working directory."""
    with runner.isolated_filesystem():
        yield
