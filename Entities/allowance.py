"""
allowance.py
------------

Defines the `Allowance` class, the recommended stroke adjustment between two
players of differing handicap.
"""

# ---------------- Standard library ----------------
from __future__ import annotations

from typing import Optional


class Allowance:
    """Recommended stroke allowance for a two-player match.

    Instance Attributes:
        has_handicap (bool): Whether any strokes should be given.
        strokes (Optional[int]): Whole strokes given, None without a handicap.
        receiver (Optional[int]): 1 or 2, the argument position of the weaker player.
        difference (Optional[float]): Unrounded absolute index difference.
        message (str): Human-readable recommendation.
        detail (Optional[str]): Human-readable difference, None without a handicap.
    """

    def __init__(
        self,
        has_handicap: bool,
        message: str,
        strokes: Optional[int] = None,
        receiver: Optional[int] = None,
        difference: Optional[float] = None,
        detail: Optional[str] = None,
    ) -> None:
        self.has_handicap = has_handicap
        self.message = message
        self.strokes = strokes
        self.receiver = receiver
        self.difference = difference
        self.detail = detail

    @property
    def strokes_text(self) -> Optional[str]:
        """Stroke count with its unit, e.g. '1 stroke' or '3 strokes'."""
        if self.strokes is None:
            return None
        return f"{self.strokes} stroke{'s' if self.strokes != 1 else ''}"

    def __repr__(self) -> str:
        if not self.has_handicap:
            return f"Allowance(none, message={self.message!r})"
        return f"Allowance(player={self.receiver}, strokes={self.strokes})"
