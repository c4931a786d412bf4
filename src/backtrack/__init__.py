"""
backtrack - Record a forward-only iterator and rewind over what it produced.

backtrack wraps any iterator in a history buffer that remembers every value
it yields. Cursors over the buffer can save their position, keep reading,
and later return to the saved position to read the same values again.
It provides:
- Pull-once recording: the wrapped iterator is never asked twice for a value
- Copying cursors that hand out independent duplicates
- Referencing cursors that hand out the recorded objects without copying
- Any number of independent cursors over one buffer

Example usage:
    from backtrack import HistoryBuffer

    buffer = HistoryBuffer(read_tokens(stream))
    cursor = buffer.referencing()
    mark = cursor.get_ref_point()
    if not try_parse_call(cursor):
        cursor.backtrack(mark)
        parse_expression(cursor)
"""

from backtrack.base import BacktrackingIterator
from backtrack.cursor import BacktrackingCursor, CopyingCursor, ReferencingCursor
from backtrack.errors import (
    BacktrackError,
    ItemNotCopyableError,
    PositionOutOfRangeError,
    SliceOutOfRangeError,
    UnknownCursorModeError,
)
from backtrack.record import HistoryBuffer, Slot
from backtrack.schema import CursorInfo, CursorMode, HistoryStats
from backtrack.slice import BacktrackingSlice
from backtrack.walkback import Walkback

__version__ = "0.1.0"
__author__ = "backtrack Contributors"

__all__ = [
    "__version__",
    "__author__",
    "BacktrackingIterator",
    "BacktrackingCursor",
    "BacktrackingSlice",
    "BacktrackError",
    "CopyingCursor",
    "CursorInfo",
    "CursorMode",
    "HistoryBuffer",
    "HistoryStats",
    "ItemNotCopyableError",
    "PositionOutOfRangeError",
    "ReferencingCursor",
    "SliceOutOfRangeError",
    "Slot",
    "UnknownCursorModeError",
    "Walkback",
]
