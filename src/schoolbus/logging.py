"""Logging helpers used by the SCHOOLBUS CLI and application.

Console output goes through Rich. An optional in-memory "flight recorder"
buffers DEBUG records and writes them to disk when something goes wrong, so
a failed run leaves a detailed trail without making the console noisy.
Third-party records get a short ``[library]`` prefix on the console.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "schoolbus"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class ThirdPartyPrefixFilter(logging.Filter):
    """Set ``record.prefix`` to ``[lib]`` for non-project loggers, else ``""``.

    Never filters a record out.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            # e.g. "sqlalchemy.engine.Engine" -> "[sqlalchemy]"
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


@dataclass(frozen=True)
class LoggingSettings:
    """Everything the CLI decides about logging before a command runs."""

    level: int = logging.WARNING
    debug_mode: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_recorder: bool = True
    flight_capacity: int = 2000
    force_flush: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    In debug mode the handler logs everything with timestamps, logger names
    and source paths; otherwise it logs at ``level`` with the third-party
    prefix filter attached.

    Args:
        level: Minimum console level (ignored in debug mode).
        debug_mode: Enable developer formatting.
        color: Disable to strip colors (mirrors click-extra's --no-color).

    Returns:
        RichHandler: Handler ready to attach to the root logger.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder: a MemoryHandler in front of a FileHandler.

    Up to ``capacity`` records are buffered and written to ``path`` when a
    record at ``flush_level`` or above arrives, or on close when
    ``flush_on_close`` is set.

    Returns:
        MemoryHandler: The buffering handler.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def configure_logging(settings: LoggingSettings) -> list[logging.Handler]:
    """Install console (and flight recorder) handlers on the root logger.

    The root logger is set to DEBUG so each handler does its own filtering;
    per-logger levels from ``settings.logger_levels`` are applied afterwards.

    Returns:
        The installed handlers.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(
            level=settings.level,
            debug_mode=settings.debug_mode,
            color=settings.color,
        )
    ]
    if settings.flight_recorder and settings.log_path is not None:
        handlers.append(
            config_flight_recorder(
                path=settings.log_path,
                capacity=settings.flight_capacity,
                flush_on_close=settings.force_flush,
            )
        )

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in settings.logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    return handlers


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    settings: LoggingSettings,
    handlers: list[logging.Handler],
) -> None:
    """Log a one-line startup summary (INFO) and environment details (DEBUG)."""

    flight_on = settings.flight_recorder and settings.log_path is not None
    logger.info(
        "SCHOOLBUS %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(settings.level),
        "ON" if flight_on else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Alembic: %s", alembic.__version__)
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_on:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            settings.log_path,
            settings.flight_capacity,
            settings.force_flush,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {
            name: logging.getLevelName(lvl)
            for name, lvl in settings.logger_levels.items()
        }
        or "<none>",
    )
