"""Small helpers shared by SCHOOLBUS CLI commands.

Display-safe database URLs, OSC-8 hyperlinks, logger-level option parsing and
stderr status lines with ASCII fallbacks.
"""

from .db_url import sanitize_url
from .hyperlinks import hyperlink
from .messages import error, success, warn

__all__ = ["error", "hyperlink", "sanitize_url", "success", "warn"]
