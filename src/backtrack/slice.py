"""
Backtracking over sequences that are already in memory.

BacktrackingSlice gives any indexable sequence (list, tuple, str, bytes)
the same advance/mark/rewind interface as a cursor over a HistoryBuffer,
without recording anything: the sequence itself is the history.
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from backtrack.base import BacktrackingIterator
from backtrack.errors import PositionOutOfRangeError, SliceOutOfRangeError

T = TypeVar("T")


class BacktrackingSlice(BacktrackingIterator[T], Generic[T]):
    """
    Back-and-forth traversal over an indexable sequence.

    The position never moves past ``len(sequence)``. Items are yielded as
    stored in the sequence, without copying.

    Usage:
        tokens = BacktrackingSlice(["let", "x", "=", "1"])
        mark = tokens.get_ref_point()
        next(tokens)                   # "let"
        tokens.backtrack(mark)
        tokens.slice(1, 3)             # ["x", "="]
    """

    def __init__(self, sequence: Sequence[T]) -> None:
        self._sequence = sequence
        self._position = 0

    def __repr__(self) -> str:
        return f"<BacktrackingSlice: position {self._position} of {len(self._sequence)}>"

    def __len__(self) -> int:
        return len(self._sequence)

    def __next__(self) -> T:
        if self._position >= len(self._sequence):
            raise StopIteration
        value = self._sequence[self._position]
        self._position += 1
        return value

    def get_ref_point(self) -> int:
        return self._position

    def get_oldest_point(self) -> int:
        return 0

    def backtrack(self, point: int) -> None:
        """
        Move to a position in ``[0, len(sequence)]``.

        Raises:
            PositionOutOfRangeError: If point is outside the sequence
        """
        if not 0 <= point <= len(self._sequence):
            raise PositionOutOfRangeError(position=point, length=len(self._sequence))
        self._position = point

    def slice(self, start: int | None = None, stop: int | None = None) -> Sequence[T]:
        """
        Return the sub-sequence between two marks.

        A missing start means the oldest point, a missing stop the end of
        the sequence. The current position is not changed.

        Raises:
            SliceOutOfRangeError: If a bound is outside the sequence or
                start is after stop
        """
        length = len(self._sequence)
        lo = self.get_oldest_point() if start is None else start
        hi = length if stop is None else stop
        if not 0 <= lo <= hi <= length:
            raise SliceOutOfRangeError(start=start, stop=stop, length=length)
        return self._sequence[lo:hi]

    def __getitem__(self, index: slice) -> Sequence[T]:
        """
        Slice by marks, as in ``tokens[mark:]``.

        Steps are not supported; only slices are accepted.
        """
        if not isinstance(index, slice):
            raise TypeError(
                f"BacktrackingSlice indices must be slices, not {type(index).__name__}"
            )
        if index.step not in (None, 1):
            raise TypeError("BacktrackingSlice does not support slice steps")
        return self.slice(index.start, index.stop)
