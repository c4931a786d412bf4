"""
Base class for the backtracking interface.

BacktrackingIterator is the common contract of everything in this package
that can be advanced and rewound:
- __next__(): Yield the next value or raise StopIteration
- get_ref_point(): Save the current position as a mark
- get_oldest_point(): The earliest mark that is still valid
- backtrack(): Return to a saved mark

Marks are plain integers. A mark is only meaningful for the object (or, for
cursors, the history buffer) that produced it.

Why ABC over Protocol?
    - Shared implementation of __iter__ and start_again()
    - Nominal typing: only explicit implementations are backtracking iterators
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class BacktrackingIterator(ABC, Iterator[T], Generic[T]):
    """
    Abstract base class for iterators that can return to earlier positions.

    Unlike ordinary iterators, a backtracking iterator that has raised
    StopIteration is not finished for good: after backtrack() it yields
    values again.

    Subclasses must implement:
    - __next__(): Produce the value at the current position and advance
    - get_ref_point(): Return the current position
    - get_oldest_point(): Return the oldest position still reachable
    - backtrack(): Move to a previously saved position
    """

    def __iter__(self) -> "BacktrackingIterator[T]":
        """Backtracking iterators are their own iterators."""
        return self

    @abstractmethod
    def __next__(self) -> T:
        """
        Yield the value at the current position and advance by one.

        Raises:
            StopIteration: If no value exists at the current position
        """
        ...

    @abstractmethod
    def get_ref_point(self) -> int:
        """
        Return the current position as a mark.

        The mark stays valid for as long as the position remains reachable.
        """
        ...

    @abstractmethod
    def get_oldest_point(self) -> int:
        """Return the oldest position that backtrack() accepts."""
        ...

    @abstractmethod
    def backtrack(self, point: int) -> None:
        """
        Return to a previously saved position.

        Args:
            point: A mark returned by get_ref_point()
        """
        ...

    def start_again(self) -> None:
        """Rewind to the oldest reachable position."""
        self.backtrack(self.get_oldest_point())
