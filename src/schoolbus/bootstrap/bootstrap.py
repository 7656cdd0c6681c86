"""Bootstrap the message bus with handlers and unit of work."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any

from schoolbus import config
from schoolbus.adapters.db.engine import make_engine
from schoolbus.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from schoolbus.interfaces.unit_of_work import AbstractUnitOfWork
from schoolbus.service_layer.handlers import COMMAND_HANDLERS, QUERY_HANDLERS
from schoolbus.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from schoolbus.service_layer.commands import Command
    from schoolbus.service_layer.queries import Query


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    message_bus: MessageBus


def build_write_uow(url: str) -> AbstractUnitOfWork:
    """Build a new unit of work for write operations."""
    engine = make_engine(url)
    return SqlAlchemyUnitOfWork(engine)


def build_message_bus(
    uow: AbstractUnitOfWork,
    command_handlers: dict[type[Command], Callable[..., Any]],
    query_handlers: dict[type[Query], Callable[..., Any]] | None = None,
) -> MessageBus:
    """Build a message bus with injected dependencies."""
    dependencies = {"uow": uow}
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }
    injected_query_handlers = {
        query_type: inject_dependencies(handler, dependencies)
        for query_type, handler in (query_handlers or {}).items()
    }

    return MessageBus(
        uow,
        command_handlers=injected_command_handlers,
        query_handlers=injected_query_handlers,
    )


def bootstrap(url: str | None = None) -> AppContainer:
    """Bootstrap the message bus with handlers and unit of work.

    Args:
        url: Database URL. Defaults to ``SCHOOLBUS_DB_URL``.
    """
    uow = build_write_uow(url if url is not None else config.get_db_url())
    message_bus = build_message_bus(uow, COMMAND_HANDLERS, QUERY_HANDLERS)

    return AppContainer(
        message_bus=message_bus,
    )


def bootstrap_in_memory() -> AppContainer:
    """Bootstrap against a fresh in-memory keyed store (no database)."""
    uow = InMemoryUnitOfWork()
    return AppContainer(
        message_bus=build_message_bus(uow, COMMAND_HANDLERS, QUERY_HANDLERS),
    )


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Inject dependencies into a handler function based on its parameters."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return partial(handler, **deps)
