"""Status lines for the SCHOOLBUS CLI.

Every line goes to stderr, so stdout stays reserved for command output
(driver IDs, eligibility verdicts, Alembic output). Emoji markers fall back to
ASCII when stderr cannot encode them.
"""

from enum import Enum

import click


class Status(Enum):
    """Kinds of status line, with their marker, fallback and color."""

    SUCCESS = ("✅", "[OK]", "green")
    WARNING = ("⚠️", "[!]", "yellow")
    ERROR = ("❌", "[X]", "red")

    def __init__(self, emoji: str, fallback: str, color: str) -> None:
        self.emoji = emoji
        self.fallback = fallback
        self.color = color


def _stderr_can_encode(text: str) -> bool:
    encoding = getattr(click.get_text_stream("stderr"), "encoding", None) or "ascii"
    try:
        text.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(status: Status) -> str:
    """Return the marker for ``status``: the emoji if stderr can show it."""
    return status.emoji if _stderr_can_encode(status.emoji) else status.fallback


def _emit(status: Status, msg: str) -> None:
    click.secho(f"{glyph(status)}  {msg}", fg=status.color, bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green success line, e.g. ``✅  Registered driver 1``."""
    _emit(Status.SUCCESS, msg)


def warn(msg: str) -> None:
    """Emit a yellow warning line, e.g. ``⚠️  Driver 3 is not eligible``."""
    _emit(Status.WARNING, msg)


def error(msg: str) -> None:
    """Emit a red error line, e.g. ``❌  Driver 999 does not exist.``"""
    _emit(Status.ERROR, msg)
