"""OSC-8 terminal hyperlinks for CLI help text."""

import os
import sys
from typing import TextIO

OSC8_TERMINALS = frozenset({"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"})


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Best-effort guess whether ``stream`` (default stdout) renders OSC-8 links.

    Non-TTY streams never do. Otherwise the terminal is recognised from
    ``TERM_PROGRAM``, ``WT_SESSION`` (Windows Terminal), ``VTE_VERSION`` or a
    ``TERM`` of alacritty/konsole.
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    return bool(
        (os.getenv("TERM_PROGRAM") or "").lower() in OSC8_TERMINALS
        or os.getenv("WT_SESSION")
        or os.getenv("VTE_VERSION")
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str) -> str:
    """Wrap ``url`` in BEL-terminated OSC-8 escapes when supported, else return it."""
    if not supports_osc8():
        return url
    return f"\x1b]8;;{url}\x07{url}\x1b]8;;\x07"
