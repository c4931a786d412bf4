"""
Reverse walk over a recorded history.

A Walkback starts after the newest recorded item and moves one item back
per step. Its get_ref_point() names the item it yielded last, so passing
that mark to a cursor's backtrack() replays the item from there.
"""

from collections.abc import Callable, Iterator, Sequence
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Walkback(Iterator[T], Generic[T]):
    """
    Iterator over a history from newest to oldest item.

    The walk covers the items recorded when it was created; items appended
    afterwards are not visited. It never pulls from a wrapped iterator.
    """

    def __init__(
        self,
        history: Sequence[Any],
        emit: Callable[[Any, int], T] | None = None,
    ) -> None:
        self._history = history
        self._emit = emit
        self._reverse_position = len(history)

    def __iter__(self) -> "Walkback[T]":
        return self

    def __next__(self) -> T:
        if self._reverse_position == 0:
            raise StopIteration
        self._reverse_position -= 1
        item = self._history[self._reverse_position]
        if self._emit is None:
            return item
        return self._emit(item, self._reverse_position)

    def get_ref_point(self) -> int:
        """Position of the most recently yielded item."""
        return self._reverse_position
