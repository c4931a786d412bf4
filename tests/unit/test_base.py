"""
Unit tests for the backtracking interface and Walkback.

Tests cover:
- BacktrackingIterator ABC implementation
- start_again() default behaviour
- Walkback over a plain sequence
"""

import pytest

from backtrack import BacktrackingIterator, Walkback


# =============================================================================
# Test Fixtures
# =============================================================================


class CountdownIterator(BacktrackingIterator[int]):
    """Counts down from a start value; marks are steps taken."""

    def __init__(self, start: int) -> None:
        self._start = start
        self._steps = 0

    def __next__(self) -> int:
        if self._steps >= self._start:
            raise StopIteration
        self._steps += 1
        return self._start - self._steps + 1

    def get_ref_point(self) -> int:
        return self._steps

    def get_oldest_point(self) -> int:
        return 0

    def backtrack(self, point: int) -> None:
        self._steps = point


class TestBacktrackingIterator:
    """Tests for the abstract interface."""

    def test_cannot_instantiate_abstract(self) -> None:
        """The ABC cannot be instantiated directly."""
        with pytest.raises(TypeError):
            BacktrackingIterator()

    def test_missing_method(self) -> None:
        """Subclasses must implement every abstract method."""

        class Incomplete(BacktrackingIterator[int]):
            def __next__(self) -> int:
                return 0

        with pytest.raises(TypeError):
            Incomplete()

    def test_iteration(self) -> None:
        """Implementations work with for loops."""
        assert list(CountdownIterator(3)) == [3, 2, 1]

    def test_start_again(self) -> None:
        """start_again() backtracks to the oldest point."""
        it = CountdownIterator(3)
        list(it)
        it.start_again()
        assert next(it) == 3


class TestWalkback:
    """Tests for reverse walks."""

    def test_reverse_order(self) -> None:
        """Items come newest first."""
        assert list(Walkback([1, 2, 3])) == [3, 2, 1]

    def test_marks(self) -> None:
        """The mark names the item yielded last."""
        wb = Walkback("abc")
        assert wb.get_ref_point() == 3
        assert next(wb) == "c"
        assert wb.get_ref_point() == 2

    def test_exhausted(self) -> None:
        """An empty walk stops at once and stays at 0."""
        wb = Walkback([])
        assert next(wb, None) is None
        assert wb.get_ref_point() == 0

    def test_fixed_length(self) -> None:
        """Items appended after creation are not visited."""
        history = [1, 2]
        wb = Walkback(history)
        history.append(3)
        assert list(wb) == [2, 1]

    def test_emit(self) -> None:
        """emit receives each item and its position."""
        wb = Walkback(["x", "y"], emit=lambda item, pos: f"{pos}:{item}")
        assert list(wb) == ["1:y", "0:x"]
