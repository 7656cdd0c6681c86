"""Service layer handlers."""

from collections.abc import Callable

from .driver_handlers import COMMAND_HANDLERS as DRIVER_COMMAND_HANDLERS
from .driver_handlers import QUERY_HANDLERS as DRIVER_QUERY_HANDLERS

__all__ = ["COMMAND_HANDLERS", "QUERY_HANDLERS"]

COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    **DRIVER_COMMAND_HANDLERS,
}

QUERY_HANDLERS: dict[type, Callable[..., object]] = {
    **DRIVER_QUERY_HANDLERS,
}
