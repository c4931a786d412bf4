"""
Schema definitions for backtrack.

This module defines the enums and Pydantic models shared across the package:
- CursorMode: How a cursor turns a recorded item into its output
- HistoryStats: Point-in-time statistics of a history buffer
- CursorInfo: Point-in-time description of a live cursor

Models are frozen: they describe a moment in a buffer's life and are
rebuilt on every request rather than updated in place.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from backtrack.errors import UnknownCursorModeError


# =============================================================================
# Enums
# =============================================================================


class CursorMode(str, Enum):
    """
    Output policy of a cursor, fixed when the cursor is created.

    COPYING hands out an independent duplicate of each recorded item.
    REFERENCING hands out the recorded object itself.
    """

    COPYING = "copying"
    REFERENCING = "referencing"

    @classmethod
    def parse(cls, value: "CursorMode | str") -> "CursorMode":
        """Coerce a mode or its string value, rejecting unknown names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnknownCursorModeError(
                mode=str(value),
                valid_modes=[m.value for m in cls],
            ) from None


# =============================================================================
# Statistics Models
# =============================================================================


class HistoryStats(BaseModel):
    """
    Statistics of a history buffer.

    Attributes:
        length: Number of recorded items
        exhausted: Whether the wrapped iterator has signalled its end
        source_pulls: Calls made to the wrapped iterator, including the
            one that ended it and any that raised
        failed_pulls: Calls to the wrapped iterator that raised an exception
        live_cursors: Cursors currently attached to the buffer
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    length: int = Field(..., ge=0)
    exhausted: bool = False
    source_pulls: int = Field(default=0, ge=0)
    failed_pulls: int = Field(default=0, ge=0)
    live_cursors: int = Field(default=0, ge=0)


class CursorInfo(BaseModel):
    """Description of one live cursor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: CursorMode
    position: int = Field(..., ge=0)
    at_live_edge: bool = False
