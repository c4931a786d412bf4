"""
Exception hierarchy for backtrack.

All backtrack exceptions inherit from BacktrackError, allowing callers to
catch every library-specific exception with a single except clause.

Exception Categories:
    - PositionOutOfRangeError: A position lies outside the recorded history
    - SliceOutOfRangeError: A slice bound lies outside the sequence
    - ItemNotCopyableError: A copying cursor could not duplicate an item
    - UnknownCursorModeError: A cursor mode name was not recognised

Reaching the end of the wrapped iterator is not an error: cursors raise a
plain StopIteration. Exceptions raised by the wrapped iterator itself are
never wrapped and reach the caller unchanged.
"""

from dataclasses import dataclass, field
from typing import Any


# =============================================================================
# Error Codes
# =============================================================================

# Positioning errors: 1xxx
ERROR_POSITION_OUT_OF_RANGE = 1001
ERROR_SLICE_OUT_OF_RANGE = 1002

# Item errors: 2xxx
ERROR_ITEM_NOT_COPYABLE = 2001

# Mode errors: 3xxx
ERROR_UNKNOWN_CURSOR_MODE = 3001


# =============================================================================
# Base Exception
# =============================================================================


@dataclass
class BacktrackError(Exception):
    """
    Base exception for all backtrack errors.

    Attributes:
        message: Human-readable error description
        code: Numeric error code for programmatic handling
        suggestion: Optional hint for how to resolve the error
        context: Optional dict with additional debugging info
    """

    message: str = ""
    code: int = 0
    suggestion: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        parts = [f"[E{self.code}] {self.message}"]
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def __repr__(self) -> str:
        """Format error for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "suggestion": self.suggestion,
            "context": self.context,
        }


# =============================================================================
# Positioning Errors
# =============================================================================


@dataclass
class PositionOutOfRangeError(BacktrackError, IndexError):
    """
    Raised when a position falls outside ``[0, length]``.

    ``length`` is the number of recorded items at the time of the request.
    The position equal to ``length`` is the live edge and is always valid.
    The rejected request leaves all state untouched.

    Attributes:
        position: The requested position
        length: Number of recorded items when the request was made
    """

    position: int = 0
    length: int = 0

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = (
                f"Position {self.position} is outside the recorded history "
                f"[0, {self.length}]"
            )
        if self.code == 0:
            self.code = ERROR_POSITION_OUT_OF_RANGE
        if not self.suggestion:
            self.suggestion = "Only backtrack to marks returned by get_ref_point()"
        self.context.update({
            "position": self.position,
            "length": self.length,
        })


@dataclass
class SliceOutOfRangeError(BacktrackError, IndexError):
    """Raised when a slice bound falls outside the underlying sequence."""

    start: int | None = None
    stop: int | None = None
    length: int = 0

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = (
                f"Slice [{self.start}:{self.stop}] is out of bounds "
                f"for length {self.length}"
            )
        if self.code == 0:
            self.code = ERROR_SLICE_OUT_OF_RANGE
        self.context.update({
            "start": self.start,
            "stop": self.stop,
            "length": self.length,
        })


# =============================================================================
# Item Errors
# =============================================================================


@dataclass
class ItemNotCopyableError(BacktrackError):
    """
    Raised when a copying cursor fails to duplicate a recorded item.

    The cursor position is not advanced, so the same item can be requested
    again (for example through a referencing cursor over the same buffer).

    Attributes:
        position: Position of the item that could not be copied
        item_type: Type name of the item
        underlying_error: Message of the exception raised by the copier
    """

    position: int = 0
    item_type: str = ""
    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = (
                f"Cannot copy {self.item_type} at position {self.position}: "
                f"{self.underlying_error}"
            )
        if self.code == 0:
            self.code = ERROR_ITEM_NOT_COPYABLE
        if not self.suggestion:
            self.suggestion = "Use a referencing cursor or pass a custom copier"
        self.context.update({
            "position": self.position,
            "item_type": self.item_type,
            "underlying_error": self.underlying_error,
        })


# =============================================================================
# Mode Errors
# =============================================================================


@dataclass
class UnknownCursorModeError(BacktrackError, ValueError):
    """Raised when a cursor is requested with an unrecognised mode."""

    mode: str = ""
    valid_modes: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Unknown cursor mode: {self.mode}"
        if self.code == 0:
            self.code = ERROR_UNKNOWN_CURSOR_MODE
        if not self.suggestion and self.valid_modes:
            self.suggestion = f"Use one of: {', '.join(self.valid_modes)}"
        self.context.update({
            "mode": self.mode,
            "valid_modes": self.valid_modes,
        })
