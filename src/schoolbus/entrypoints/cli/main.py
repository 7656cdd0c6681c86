"""SCHOOLBUS CLI entry point.

Defines the top-level ``schoolbus`` command (via Click-Extra), sets up logging
for every invocation and registers the command groups:

- ``schoolbus db``: forward-only database management.
- ``schoolbus drivers``: the driver registry.

Examples
    $ schoolbus --version
    $ schoolbus db upgrade
    $ schoolbus drivers register "Ada Lovelace" --license-number DL-1 \\
        --license-expiry 1900000000 --background-check 1700000000
    $ schoolbus drivers check-eligibility 1
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from schoolbus import __version__
from schoolbus.logging import LoggingSettings, configure_logging, log_startup

from .db import db as db_group
from .drivers import drivers as drivers_group
from .helpers import hyperlink
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)

APP_NAME = "schoolbus"
BASE_LEVEL = logging.WARNING

HELP = """SCHOOLBUS command-line interface.

    SCHOOLBUS keeps the credentials of school-bus drivers: licenses, background
    checks, qualifications and a safety score that drops with every recorded
    incident. It answers one question on demand: may this driver drive now?
    """

DB_URL_DOCS = "https://docs.sqlalchemy.org/en/20/core/engines.html#database-urls"

EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  SCHOOLBUS_DB_URL format: " + hyperlink(DB_URL_DOCS),
    ]
)


def default_log_path() -> Path:
    """Flight recorder file under the per-user log directory."""
    return Path(user_log_dir(APP_NAME, appauthor=False, ensure_exists=True)) / "latest.log"


def effective_level(verbose_count: int, quiet_count: int) -> int:
    """WARNING, one level lower per ``-v`` and higher per ``-q``, clamped."""
    level = BASE_LEVEL - 10 * verbose_count + 10 * quiet_count
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Decrease the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    help="Enable debug mode (developer formatting, everything on the console).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path of the flight recorder file.",
    default=None,
    envvar="SCHOOLBUS_LOG_PATH",
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="SCHOOLBUS_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    help=(
        "Keep the last N log records at DEBUG granularity (unaffected by -v/-q) "
        "and write them to --log-path when a WARNING or ERROR occurs."
    ),
    default=True,
    envvar="SCHOOLBUS_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush",
    help="Also write the flight recorder buffer to --log-path on a clean exit.",
    default=False,
    envvar="SCHOOLBUS_FORCE_FLUSH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the minimum LEVEL of logger NAME (NAME=LEVEL). Applies to both the "
        "console and the flight recorder. Repeatable, e.g. -L sqlalchemy=INFO."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    envvar="SCHOOLBUS_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def schoolbus(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path | None,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """SCHOOLBUS command-line interface."""

    settings = LoggingSettings(
        level=effective_level(verbose_count, quiet_count),
        debug_mode=debug,
        color=ctx.color is not False,
        log_path=(log_path or default_log_path()) if flight_recorder else None,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity,
        force_flush=force_flush,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    log_startup(logger, app_version=__version__, settings=settings, handlers=handlers)

    ctx.call_on_close(logging.shutdown)


schoolbus.add_command(db_group)
schoolbus.add_command(drivers_group)
