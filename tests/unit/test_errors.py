"""
Unit tests for the error hierarchy.

Tests cover:
- Base BacktrackError behavior
- Positioning errors with context
- Item and mode errors
- Error serialization
"""

import pytest

from backtrack.errors import (
    ERROR_ITEM_NOT_COPYABLE,
    ERROR_POSITION_OUT_OF_RANGE,
    ERROR_SLICE_OUT_OF_RANGE,
    ERROR_UNKNOWN_CURSOR_MODE,
    BacktrackError,
    ItemNotCopyableError,
    PositionOutOfRangeError,
    SliceOutOfRangeError,
    UnknownCursorModeError,
)


class TestBacktrackError:
    """Tests for base BacktrackError."""

    def test_basic_error(self) -> None:
        """Create a basic error with message."""
        err = BacktrackError(message="Something went wrong", code=9999)
        assert err.message == "Something went wrong"
        assert err.code == 9999
        assert err.suggestion is None
        assert err.context == {}

    def test_str_format(self) -> None:
        """String format includes code and message."""
        err = BacktrackError(message="Test error", code=1234)
        assert str(err) == "[E1234] Test error"

    def test_str_with_suggestion(self) -> None:
        """Suggestion is appended on its own line."""
        err = BacktrackError(message="Failed", code=1, suggestion="Try again")
        assert "Suggestion: Try again" in str(err)

    def test_repr_format(self) -> None:
        """Repr includes class name and details."""
        err = BacktrackError(message="Test", code=1)
        assert "BacktrackError" in repr(err)
        assert "message='Test'" in repr(err)

    def test_to_dict(self) -> None:
        """Convert error to dictionary."""
        err = BacktrackError(
            message="Test",
            code=1,
            suggestion="Try again",
            context={"foo": "bar"},
        )
        d = err.to_dict()
        assert d["error_type"] == "BacktrackError"
        assert d["message"] == "Test"
        assert d["code"] == 1
        assert d["suggestion"] == "Try again"
        assert d["context"]["foo"] == "bar"

    def test_is_exception(self) -> None:
        """BacktrackError is a proper exception."""
        with pytest.raises(BacktrackError):
            raise BacktrackError(message="Test", code=1)


class TestPositionErrors:
    """Tests for positioning errors."""

    def test_position_out_of_range(self) -> None:
        """Defaults are filled from position and length."""
        err = PositionOutOfRangeError(position=7, length=3)
        assert err.code == ERROR_POSITION_OUT_OF_RANGE
        assert "7" in str(err)
        assert "[0, 3]" in str(err)
        assert err.context == {"position": 7, "length": 3}
        assert "get_ref_point" in err.suggestion

    def test_position_error_is_index_error(self) -> None:
        """Callers catching IndexError also catch range errors."""
        with pytest.raises(IndexError):
            raise PositionOutOfRangeError(position=-1, length=0)

    def test_slice_out_of_range(self) -> None:
        """Slice errors carry both bounds."""
        err = SliceOutOfRangeError(start=2, stop=9, length=4)
        assert err.code == ERROR_SLICE_OUT_OF_RANGE
        assert "[2:9]" in str(err)
        assert err.context["length"] == 4
        assert isinstance(err, IndexError)

    def test_custom_message_kept(self) -> None:
        """An explicit message is not overwritten."""
        err = PositionOutOfRangeError(message="custom", position=1, length=0)
        assert err.message == "custom"
        assert err.code == ERROR_POSITION_OUT_OF_RANGE


class TestItemAndModeErrors:
    """Tests for item and mode errors."""

    def test_item_not_copyable(self) -> None:
        """Copy failures describe the item and the cause."""
        err = ItemNotCopyableError(
            position=4,
            item_type="Lock",
            underlying_error="cannot pickle",
        )
        assert err.code == ERROR_ITEM_NOT_COPYABLE
        assert "Lock" in str(err)
        assert "position 4" in str(err)
        assert "referencing" in err.suggestion
        assert err.context["underlying_error"] == "cannot pickle"

    def test_unknown_cursor_mode(self) -> None:
        """Mode errors list the valid modes."""
        err = UnknownCursorModeError(mode="mirror", valid_modes=["copying", "referencing"])
        assert err.code == ERROR_UNKNOWN_CURSOR_MODE
        assert "mirror" in str(err)
        assert "copying, referencing" in err.suggestion
        assert isinstance(err, ValueError)

    def test_serialization(self) -> None:
        """Subclass errors serialize with their own type name."""
        d = PositionOutOfRangeError(position=5, length=2).to_dict()
        assert d["error_type"] == "PositionOutOfRangeError"
        assert d["code"] == ERROR_POSITION_OUT_OF_RANGE
        assert d["context"]["position"] == 5
