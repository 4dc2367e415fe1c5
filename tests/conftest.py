"""Shared pytest fixtures."""

from collections.abc import Iterator

import pytest

from curation.coordinator.metrics import CoordinatorMetrics


@pytest.fixture(autouse=True)
def reset_metrics() -> Iterator[None]:
    """Give every test a fresh metrics singleton."""
    CoordinatorMetrics.reset()
    yield
    CoordinatorMetrics.reset()
