"""Shared fixtures for the handicap tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from Entities.round import RoundResult


def make_round(diff: int, par: int = 54, course: str = "Test Course", date: str = "2025-01-01") -> RoundResult:
    """Round summary scoring `diff` strokes over `par`."""
    return RoundResult(par + diff, par, course=course, date=date)


def make_window(diffs, par: int = 54) -> tuple:
    """Window of rounds, newest-first, with dates counting down from 2025-01-31."""
    return tuple(make_round(d, par=par, date=f"2025-01-{31 - i:02d}") for i, d in enumerate(diffs))


@pytest.fixture
def five_round_window():
    return make_window([3, -1, 0, 2, 1])
