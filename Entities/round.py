"""
round.py
--------

Defines the `RoundResult` class for representing one completed disc golf round
as handed to the handicap engine: total score, total par, course and date.
"""

# ---------------- Standard library ----------------
from __future__ import annotations

import math
from typing import Any, Optional

# ---------------- Third-party ----------------
import pandas as pd


def _as_int(value: Any) -> Optional[int]:
    """Converts a raw score/par value to int.

    Missing, non-numeric, non-finite and fractional values become None, so the
    round fails the sanity filter instead of being silently altered.
    """
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


class RoundResult:
    """Represents the summary of a single completed round.

    Instance Attributes:
        score (Optional[int]): Total strokes for the round, None if missing.
        par (Optional[int]): Total par for the round, None if missing.
        course (Optional[str]): Course label, informational only.
        date (Any): Date of the round, used for display and ordering only.
    """

    __slots__ = ("score", "par", "course", "date")

    def __init__(self, score: Any, par: Any, course: Optional[str] = None, date: Any = None) -> None:
        """Initializes a RoundResult.

        Args:
            score (Any): Total strokes. Missing or non-numeric values are stored as None.
            par (Any): Total par. Missing or non-numeric values are stored as None.
            course (Optional[str]): Course label.
            date (Any): Date or ISO-8601 string.
        """
        self.score = _as_int(score)
        self.par = _as_int(par)
        self.course = course
        self.date = date

    @classmethod
    def from_row(cls, row: pd.Series) -> RoundResult:
        """Builds a RoundResult from a pandas Series representing one loaded round.

        Args:
            row (pd.Series): Row with 'score', 'par' and optionally 'course' and 'date'.

        Returns:
            RoundResult: The round summary.
        """
        course = row.get("course")
        if course is not None and pd.isna(course):
            course = None
        date = row.get("date")
        if isinstance(date, pd.Timestamp):
            date = date.date().isoformat()
        elif date is not None and pd.isna(date):
            date = None
        return cls(row.get("score"), row.get("par"), course=course, date=date)

    @classmethod
    def from_dict(cls, data: dict) -> RoundResult:
        """Builds a RoundResult from a stored mapping."""
        return cls(data.get("score"), data.get("par"), course=data.get("course"), date=data.get("date"))

    def to_dict(self) -> dict:
        """Returns the plain mapping the host persists."""
        return {"score": self.score, "par": self.par, "course": self.course, "date": self.date}

    @property
    def relative_score(self) -> Optional[int]:
        """Strokes over par, or None if score or par is missing."""
        if self.score is None or self.par is None:
            return None
        return self.score - self.par

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoundResult):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self.score, self.par, self.course, self.date))

    def __repr__(self) -> str:
        """Returns a concise string representation of the round."""
        return f"RoundResult(score={self.score}, par={self.par}, course={self.course}, date={self.date})"
