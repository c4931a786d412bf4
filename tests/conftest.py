"""
Pytest configuration and fixtures for backtrack tests.

This module provides shared fixtures used across unit and integration tests.
"""

from collections.abc import Iterable, Iterator
from typing import Any

import pytest

from backtrack import HistoryBuffer


class CountingSource(Iterator[Any]):
    """
    Iterator that counts how often it is asked for a value.

    Attributes:
        calls: Every __next__ call, including the one that ends the sequence
        produced: Values actually handed out
        fail_at: Call number (1-based) that raises RuntimeError, once
    """

    def __init__(self, values: Iterable[Any], fail_at: int | None = None) -> None:
        self._values = list(values)
        self._index = 0
        self.calls = 0
        self.produced = 0
        self.fail_at = fail_at

    def __iter__(self) -> "CountingSource":
        return self

    def __next__(self) -> Any:
        self.calls += 1
        if self.fail_at is not None and self.calls == self.fail_at:
            raise RuntimeError(f"source failure on call {self.calls}")
        if self._index >= len(self._values):
            raise StopIteration
        value = self._values[self._index]
        self._index += 1
        self.produced += 1
        return value


@pytest.fixture
def counting_source() -> CountingSource:
    """Return a counting source over [10, 20, 30]."""
    return CountingSource([10, 20, 30])


@pytest.fixture
def buffer(counting_source: CountingSource) -> HistoryBuffer[int]:
    """Return a history buffer over the counting source."""
    return HistoryBuffer(counting_source)


@pytest.fixture
def dict_source() -> CountingSource:
    """Return a counting source over mutable dict items."""
    return CountingSource([{"id": i, "tags": [f"t{i}"]} for i in range(5)])


@pytest.fixture
def make_source() -> type[CountingSource]:
    """Return the CountingSource class for tests that need custom values."""
    return CountingSource
