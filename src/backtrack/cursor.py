"""
Backtracking cursors over a shared history buffer.

A cursor is a position into a HistoryBuffer plus an output policy:
- CopyingCursor: yields an independent duplicate of each recorded item
- ReferencingCursor: yields the recorded object itself

Both share one algorithm, implemented once in BacktrackingCursor: ask the
buffer to resolve the current position, advance on success, stay put at
the end of the sequence. Subclasses only convert the recorded item into
their output in _emit().

Cursors are independent of each other. Rewinding or discarding a cursor
never changes the buffer, and the buffer only grows when some cursor
advances past the newest recorded item.
"""

import copy
import logging
from abc import abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from backtrack.base import BacktrackingIterator
from backtrack.errors import ItemNotCopyableError
from backtrack.schema import CursorMode
from backtrack.walkback import Walkback

if TYPE_CHECKING:
    from backtrack.record import HistoryBuffer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BacktrackingCursor(BacktrackingIterator[T]):
    """
    Abstract cursor over a HistoryBuffer.

    The position is the index of the next item to consume. It always lies
    in ``[0, len(buffer)]``; ``len(buffer)`` is the live edge, where the
    next read pulls from the wrapped iterator.

    Subclasses must implement:
    - mode: The CursorMode this class implements
    - _emit(): Convert a recorded item into the cursor's output
    """

    mode: ClassVar[CursorMode]

    def __init__(self, buffer: "HistoryBuffer[T]", position: int = 0) -> None:
        """
        Attach a cursor to a buffer.

        Args:
            buffer: The shared history buffer
            position: Starting position

        Raises:
            PositionOutOfRangeError: If position is not in [0, len(buffer)]
        """
        buffer.check_position(position)
        self._buffer = buffer
        self._position = position
        buffer._attach(self)

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}: position {self._position} "
            f"of {len(self._buffer)}>"
        )

    @property
    def buffer(self) -> "HistoryBuffer[T]":
        """The history buffer this cursor reads."""
        return self._buffer

    @property
    def position(self) -> int:
        """Index of the next item to consume."""
        return self._position

    def __next__(self) -> T:
        """
        Yield the item at the current position and advance by one.

        At the end of the sequence the position is left unchanged, so the
        cursor can still be rewound and replayed.

        Raises:
            StopIteration: If the wrapped iterator has no item here
            ItemNotCopyableError: If a copying cursor cannot duplicate the item
        """
        slot = self._buffer.record_or_replay(self._position)
        if slot is None:
            raise StopIteration
        value = self._emit(slot.item, slot.index)
        self._position = slot.index + 1
        return value

    def get_ref_point(self) -> int:
        """Return the current position as a mark."""
        return self._position

    def get_oldest_point(self) -> int:
        """History is never truncated, so the oldest point is always 0."""
        return 0

    def backtrack(self, point: int) -> None:
        """
        Move to a mark taken from any cursor over the same buffer.

        Args:
            point: A mark returned by get_ref_point() or Walkback.get_ref_point()

        Raises:
            PositionOutOfRangeError: If point is not in [0, len(buffer)];
                the position is left unchanged
        """
        self._buffer.check_position(point)
        logger.debug("Backtracking from %d to %d", self._position, point)
        self._position = point

    def fork(self) -> "BacktrackingCursor[T]":
        """Create a cursor of the same kind at the same position."""
        return self._clone()

    def walk_back(self) -> Walkback[Any]:
        """
        Walk the recorded history from newest to oldest.

        Items are converted the same way next() converts them.
        """
        return self._buffer.walk_back(emit=self._emit)

    @abstractmethod
    def _emit(self, item: T, position: int) -> T:
        """Convert a recorded item into this cursor's output."""
        ...

    @abstractmethod
    def _clone(self) -> "BacktrackingCursor[T]":
        ...


class CopyingCursor(BacktrackingCursor[T]):
    """
    Cursor that yields a fresh duplicate of each recorded item.

    Values returned by this cursor are owned by the caller: mutating them
    never affects the buffer or later replays of the same position.

    Attributes:
        copier: Function producing the duplicate (default: copy.deepcopy)
    """

    mode = CursorMode.COPYING

    def __init__(
        self,
        buffer: "HistoryBuffer[T]",
        position: int = 0,
        copier: Callable[[T], T] = copy.deepcopy,
    ) -> None:
        self.copier = copier
        super().__init__(buffer, position=position)

    def _emit(self, item: T, position: int) -> T:
        try:
            return self.copier(item)
        except Exception as e:
            raise ItemNotCopyableError(
                position=position,
                item_type=type(item).__name__,
                underlying_error=str(e),
            ) from e

    def _clone(self) -> "CopyingCursor[T]":
        return CopyingCursor(self._buffer, position=self._position, copier=self.copier)


class ReferencingCursor(BacktrackingCursor[T]):
    """
    Cursor that yields the recorded objects themselves.

    Nothing is copied, so items need not support copying. A returned object
    is shared with the buffer and with every other cursor over it; treat it
    as read-only. It stays valid for the life of the buffer, however far
    the buffer grows afterwards.
    """

    mode = CursorMode.REFERENCING

    def _emit(self, item: T, position: int) -> T:
        return item

    def _clone(self) -> "ReferencingCursor[T]":
        return ReferencingCursor(self._buffer, position=self._position)
