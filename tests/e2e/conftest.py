"""Default marks for tests under `tests/e2e/`."""

from pathlib import Path

import pytest

from tests.markers import add_default_marker

# pylint: disable=unused-argument


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add the `e2e` mark to items in `tests/e2e/`."""
    add_default_marker(items, Path(__file__).parent.resolve(), "e2e")
