"""Test the bootstrap function."""

import os
from collections.abc import Callable
from unittest import mock

import pytest

from schoolbus.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from schoolbus.bootstrap import bootstrap, bootstrap_in_memory
from schoolbus.bootstrap.bootstrap import (
    build_message_bus,
    build_write_uow,
    inject_dependencies,
)
from schoolbus.config import DatabaseUrlNotSetError
from schoolbus.interfaces.unit_of_work import AbstractUnitOfWork
from schoolbus.service_layer import commands, queries
from schoolbus.service_layer.commands import Command

# pylint: disable=redefined-outer-name
# pylint: disable=unused-argument
# pylint: disable=too-few-public-methods
# pylint: disable=magic-value-comparison


@pytest.fixture()
def setenvvar(monkeypatch):
    """Fixture to set environment variables for tests."""
    with mock.patch.dict(os.environ):
        monkeypatch.setenv("SCHOOLBUS_DB_URL", "sqlite:///:memory:")
        yield


class FakeUnitOfWork(AbstractUnitOfWork):
    """A test unit of work for testing purposes."""

    def __init__(self):
        self.committed = False

    def commit(self):
        self.committed = True

    def rollback(self):
        pass


class CustomCommand(Command):
    """A custom command for testing."""


class TestBuildWriteUoW:
    """Tests for the build_write_uow function."""

    @staticmethod
    def test_build_write_uow_returns_uow():
        """build_write_uow returns a SQLAlchemy unit of work on the given URL."""
        uow = build_write_uow(url="sqlite:///:memory:")
        assert isinstance(uow, SqlAlchemyUnitOfWork)
        assert str(uow.engine.url) == "sqlite:///:memory:"


class TestInjectDependencies:
    """Tests for inject_dependencies."""

    @staticmethod
    def test_binds_only_declared_parameters():
        """Only dependencies named in the handler signature are bound."""

        def handler(cmd, uow):
            return cmd, uow

        bound = inject_dependencies(handler, {"uow": "U", "clock": "C"})
        assert bound("cmd") == ("cmd", "U")

    @staticmethod
    def test_handler_without_dependencies():
        """Handlers with no matching parameters are left as they are."""
        bound = inject_dependencies(lambda q: q * 2, {"uow": "U"})
        assert bound(21) == 42


class TestBuildMessageBus:
    """Tests for the build_message_bus function."""

    @staticmethod
    def test_build_message_bus_injects_uow():
        """build_message_bus injects the unit of work into handlers."""
        uow = FakeUnitOfWork()

        def sample_handler(cmd: Command, uow: FakeUnitOfWork):
            with uow:
                uow.commit()

        command_handlers: dict[type[Command], Callable[..., None]] = {
            Command: sample_handler,
        }

        bus = build_message_bus(uow, command_handlers)
        bus.handle(Command())
        assert uow.committed is True

    @staticmethod
    def test_forwards_message_to_handler():
        """The message bus forwards messages to the matching handler."""
        uow = FakeUnitOfWork()
        handled_commands = []

        def sample_handler(cmd: CustomCommand, uow: FakeUnitOfWork):
            handled_commands.append(cmd)

        bus = build_message_bus(uow, {CustomCommand: sample_handler})
        command_instance = CustomCommand()
        bus.handle(command_instance)

        assert handled_commands == [command_instance]


class TestBootstrap:
    """Tests for the bootstrap functions."""

    @staticmethod
    def test_returns_app_container(setenvvar):
        """bootstrap() reads SCHOOLBUS_DB_URL and builds a SQL-backed bus."""
        app_container = bootstrap()
        assert isinstance(app_container.message_bus.uow, SqlAlchemyUnitOfWork)

    @staticmethod
    def test_explicit_url_wins(setenvvar, tmp_path):
        """An explicit URL is used instead of the environment."""
        url = f"sqlite:///{tmp_path / 'other.db'}"
        uow = bootstrap(url).message_bus.uow
        assert isinstance(uow, SqlAlchemyUnitOfWork)
        assert str(uow.engine.url) == url

    @staticmethod
    def test_missing_url_raises(monkeypatch):
        """Without a URL, bootstrap() fails loudly."""
        monkeypatch.delenv("SCHOOLBUS_DB_URL", raising=False)
        with pytest.raises(DatabaseUrlNotSetError):
            bootstrap()

    @staticmethod
    def test_in_memory_bus_runs_registry_operations(make_register_driver):
        """bootstrap_in_memory() wires every driver handler to a fresh store."""
        bus = bootstrap_in_memory().message_bus
        assert isinstance(bus.uow, InMemoryUnitOfWork)

        driver_id = bus.handle(make_register_driver())
        assert driver_id == 1
        assert bus.handle(queries.GetDriver(driver_id=1)).name == "Ada Lovelace"
        assert bus.handle(commands.DeactivateDriver(driver_id=1)) is True

    @staticmethod
    def test_in_memory_buses_are_independent(make_register_driver):
        """Each in-memory container starts empty."""
        first = bootstrap_in_memory().message_bus
        first.handle(make_register_driver())
        second = bootstrap_in_memory().message_bus
        assert second.handle(queries.GetDriver(driver_id=1)) is None
