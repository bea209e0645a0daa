"""Conftest for unit tests - mark everything under tests/unit as a unit test."""

import pytest

from findex.observability import reset_tracing


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def isolated_tracing():
    """Drop any tracer provider a test installed."""
    yield
    reset_tracing()
