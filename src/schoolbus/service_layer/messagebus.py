"""Message bus implementation for handling commands and queries."""

import logging
import threading
from collections.abc import Callable
from typing import Any

from schoolbus.domain.errors import DomainError
from schoolbus.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command
from .queries import Query

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods

Message = Command | Query


class NoHandlerForCommand(LookupError):
    """Exception raised when no handler is found for a command."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


class NoHandlerForQuery(LookupError):
    """Exception raised when no handler is found for a query."""

    def __init__(self, query: Query) -> None:
        super().__init__(f"No handler found for query {type(query).__name__}")


class MessageBus:
    """A simple message bus for handling commands and queries.

    The main responsibility of the message bus is to route messages to their
    appropriate handlers and hand back whatever the handler returns. It also
    manages logging and error handling during the dispatch process, and
    provides access to the unit of work used for transactional operations for
    convenience.

    Messages on one bus are handled one at a time under a re-entrant lock.
    The lock only covers this process; buses in other processes sharing the
    database are kept apart by the database itself (row locks on Postgres,
    ``BEGIN IMMEDIATE`` on SQLite).

    Args:
        uow: An instance of AbstractUnitOfWork for managing transactional operations.
            This uow should still have been injected into the handlers, it is
            just also available here for convenience.
        command_handlers: A mapping of command types to their handlers.
        query_handlers: A mapping of query types to their handlers.
            Note that handlers should be callables that accept a single message argument.
            Additional dependencies (i.e. uow) should be injected via closures or other means.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: dict[type[Command], Callable[..., Any]],
        query_handlers: dict[type[Query], Callable[..., Any]] | None = None,
    ) -> None:
        self.uow = uow
        self._command_handlers = command_handlers
        self._query_handlers = query_handlers or {}
        self._lock = threading.RLock()

    def handle(self, message: Message) -> Any:
        """Handle a command or query by dispatching it to the appropriate handler.

        Args:
            message: The command or query to handle.

        Returns:
            The handler's return value.

        Raises:
            NoHandlerForCommand: If no handler is found for a command type.
            NoHandlerForQuery: If no handler is found for a query type.
            Exception: If the handler raises an exception.
        """

        if isinstance(message, Query):
            handler = self._query_handlers.get(type(message))
            kind = "query"
        else:
            handler = self._command_handlers.get(type(message))
            kind = "command"

        if handler is None:
            logger.error("No handler found for %s %s", kind, type(message).__name__)
            if isinstance(message, Query):
                raise NoHandlerForQuery(message)
            raise NoHandlerForCommand(message)

        handler_name = self._get_handler_name(handler)
        logger.debug("Handling %s %s with handler %s", kind, message, handler_name)
        with self._lock:
            try:
                return handler(message)
            except DomainError as e:
                logger.warning(
                    "%s %s rejected by handler %s: %s",
                    kind.capitalize(),
                    message,
                    handler_name,
                    e,
                )
                raise
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "Exception handling %s %s with handler %s",
                    kind,
                    message,
                    handler_name,
                )
                raise

    @staticmethod
    def _get_handler_name(fn: Callable[..., Any]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
