"""Pytest fixtures for service layer handler unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from .fakes import bootstrap_test_bus

if TYPE_CHECKING:
    from schoolbus.service_layer.messagebus import MessageBus


@pytest.fixture
def make_test_bus() -> Callable[[], MessageBus]:
    """Factory for a message bus over an in-memory recording store."""
    return bootstrap_test_bus
