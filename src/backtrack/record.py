"""
History buffer for backtrack.

The HistoryBuffer wraps a forward-only iterator and records every value it
produces. Cursors read through the buffer: positions already recorded are
replayed from memory, the position right after the last recorded one is
pulled from the wrapped iterator and recorded first.

Guarantees:
    - Pull-once: the wrapped iterator is called at most once per position,
      however many cursors read it and however often they rewind
    - Append-only: recorded items are never removed, replaced or reordered,
      so references handed out by referencing cursors stay valid
    - Sticky end: once the wrapped iterator raises StopIteration it is never
      called again

A call to the wrapped iterator that raises anything other than
StopIteration records nothing and the exception reaches the caller as is.
Asking for the same position again calls the wrapped iterator again.

Example:
    from backtrack import HistoryBuffer

    buffer = HistoryBuffer(iter([10, 20, 30]))
    cursor = buffer.copying()
    next(cursor)                 # 10
    mark = cursor.get_ref_point()
    list(cursor)                 # [20, 30]
    cursor.backtrack(mark)
    list(cursor)                 # [20, 30], served from history
"""

import copy
import logging
import weakref
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, overload

from backtrack.cursor import BacktrackingCursor, CopyingCursor, ReferencingCursor
from backtrack.errors import PositionOutOfRangeError
from backtrack.schema import CursorInfo, CursorMode, HistoryStats
from backtrack.walkback import Walkback

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Slot(Generic[T]):
    """
    A recorded item together with its position.

    ``item`` is the object stored in the buffer, not a copy.
    """

    index: int
    item: T


class HistoryBuffer(Generic[T]):
    """
    Append-only record of the values produced by a wrapped iterator.

    One buffer is shared by any number of cursors. Each cursor keeps its own
    position; the buffer keeps the values and the wrapped iterator.
    Cursors hold strong references to the buffer and the buffer holds only
    weak references to its cursors, so it lives as long as any cursor does.

    Usage:
        buffer = HistoryBuffer(tokens())
        parser = buffer.referencing()
        lookahead = parser.fork()

    Attributes:
        source_pulls: Calls made to the wrapped iterator
        failed_pulls: Calls to the wrapped iterator that raised
    """

    def __init__(self, source: Iterable[T]) -> None:
        """
        Wrap an iterable.

        Args:
            source: Any iterable; iter() is called on it once, here
        """
        self._source: Iterator[T] = iter(source)
        self._items: list[T] = []
        self._exhausted = False
        self._cursors: "weakref.WeakSet[BacktrackingCursor[T]]" = weakref.WeakSet()
        self.source_pulls = 0
        self.failed_pulls = 0

    def __len__(self) -> int:
        """Number of recorded items."""
        return len(self._items)

    def __repr__(self) -> str:
        state = "exhausted" if self._exhausted else "live"
        return f"<HistoryBuffer: {len(self._items)} items, {state}>"

    @property
    def exhausted(self) -> bool:
        """Whether the wrapped iterator has raised StopIteration."""
        return self._exhausted

    # =========================================================================
    # Recording
    # =========================================================================

    def record_or_replay(self, index: int) -> Slot[T] | None:
        """
        Resolve a position to a recorded item, recording it first if needed.

        Args:
            index: Position to resolve, at most len(self)

        Returns:
            The Slot at index, or None at the end of the sequence

        Raises:
            PositionOutOfRangeError: If index is negative or beyond len(self)
            Exception: Whatever the wrapped iterator raises, unchanged
        """
        length = len(self._items)
        if 0 <= index < length:
            return Slot(index, self._items[index])
        if index != length:
            raise PositionOutOfRangeError(position=index, length=length)
        if self._exhausted:
            return None

        self.source_pulls += 1
        try:
            item = next(self._source)
        except StopIteration:
            self._exhausted = True
            logger.debug("Source exhausted after %d items", length)
            return None
        except Exception:
            self.failed_pulls += 1
            logger.debug("Source raised at position %d", index, exc_info=True)
            raise

        self._items.append(item)
        return Slot(index, item)

    def check_position(self, position: int) -> None:
        """
        Validate a cursor position against the recorded history.

        Raises:
            PositionOutOfRangeError: Unless 0 <= position <= len(self)
        """
        length = len(self._items)
        if not 0 <= position <= length:
            raise PositionOutOfRangeError(position=position, length=length)

    # =========================================================================
    # Cursors
    # =========================================================================

    def copying(
        self,
        position: int = 0,
        copier: Callable[[T], T] = copy.deepcopy,
    ) -> CopyingCursor[T]:
        """
        Create a cursor that yields independent duplicates.

        Args:
            position: Starting position (default: the first item)
            copier: Function producing a duplicate of a recorded item

        Raises:
            PositionOutOfRangeError: If position is not in [0, len(self)]
        """
        return CopyingCursor(self, position=position, copier=copier)

    def referencing(self, position: int = 0) -> ReferencingCursor[T]:
        """
        Create a cursor that yields the recorded objects themselves.

        Args:
            position: Starting position (default: the first item)

        Raises:
            PositionOutOfRangeError: If position is not in [0, len(self)]
        """
        return ReferencingCursor(self, position=position)

    def cursor(self, mode: CursorMode | str, position: int = 0) -> BacktrackingCursor[T]:
        """
        Create a cursor by mode name.

        Args:
            mode: CursorMode or its value ("copying" or "referencing")
            position: Starting position (default: the first item)

        Raises:
            UnknownCursorModeError: If mode is not recognised
            PositionOutOfRangeError: If position is not in [0, len(self)]
        """
        if CursorMode.parse(mode) is CursorMode.COPYING:
            return self.copying(position=position)
        return self.referencing(position=position)

    def cursors(self) -> list[BacktrackingCursor[T]]:
        """Live cursors attached to this buffer, ordered by position."""
        return sorted(self._cursors, key=lambda c: c.get_ref_point())

    def _attach(self, cursor: BacktrackingCursor[T]) -> None:
        self._cursors.add(cursor)
        logger.debug(
            "Attached %s cursor at position %d (%d live)",
            cursor.mode.value,
            cursor.get_ref_point(),
            len(self._cursors),
        )

    # =========================================================================
    # Inspection
    # =========================================================================

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: int | slice) -> Any:
        """
        Read recorded items without pulling from the wrapped iterator.

        Integer indexes must address a recorded item; negative indexes are
        not accepted. Slices follow list semantics over the recorded items.

        Raises:
            PositionOutOfRangeError: If an integer index is not recorded
        """
        if isinstance(index, slice):
            return self._items[index]
        if not 0 <= index < len(self._items):
            raise PositionOutOfRangeError(position=index, length=len(self._items))
        return self._items[index]

    def walk_back(self, emit: Callable[[T, int], Any] | None = None) -> Walkback[Any]:
        """
        Walk the recorded history from newest to oldest.

        Args:
            emit: Conversion applied to each item and its position
                (default: items are yielded as stored)
        """
        return Walkback(self._items, emit=emit)

    def snapshot(self) -> tuple[T, ...]:
        """The recorded items, oldest first. Items are not copied."""
        return tuple(self._items)

    def stats(self) -> HistoryStats:
        """Current statistics of this buffer."""
        return HistoryStats(
            length=len(self._items),
            exhausted=self._exhausted,
            source_pulls=self.source_pulls,
            failed_pulls=self.failed_pulls,
            live_cursors=len(self._cursors),
        )

    def cursor_infos(self) -> list[CursorInfo]:
        """Descriptions of the live cursors, ordered by position."""
        length = len(self._items)
        return [
            CursorInfo(
                mode=c.mode,
                position=c.get_ref_point(),
                at_live_edge=c.get_ref_point() == length,
            )
            for c in self.cursors()
        ]
