"""Handicap (HDCP) engine for disc golf round data.

This module computes a player's handicap index from a bounded window of the most
recent rounds, classifies the index into a skill tier, recommends a stroke
allowance between two players, and produces display strings and a trend of the
index over a growing number of rounds.

Functions:
    compute_index:
        Mean strokes over par of the valid rounds in the window, one decimal.
    valid_count:
        Number of rounds in the window passing the sanity filter.
    record_round:
        Prepends a round to the window and truncates it to the window size.
    classify_tier:
        Maps an index to a SkillTier.
    recommended_allowance:
        Stroke allowance for a two-player match.
    display_index:
        Signed index string, or a placeholder/progress message.
    trend:
        Lazy, restartable sequence of the index over growing prefixes.
    estimated_index:
        Seed index for a self-reported skill level.

Every function is pure and total: insufficient or malformed input yields None or a
placeholder, never an exception. The window is treated as an immutable value.
"""

from __future__ import annotations

import math
from typing import Any, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from Entities.allowance import Allowance
from Entities.constants import Constants
from Entities.round import RoundResult
from Entities.tier import TIERS, SkillTier
import services as svcs


def _is_missing(value: Optional[float]) -> bool:
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return True


def _window(rounds: Optional[Sequence[RoundResult]]) -> Tuple[RoundResult, ...]:
    """Returns the first WINDOW_SIZE entries as a tuple."""
    if not rounds:
        return ()
    return tuple(rounds[:Constants.WINDOW_SIZE])


def valid_count(window: Optional[Sequence[RoundResult]]) -> int:
    """Counts the rounds among the most recent WINDOW_SIZE that pass the sanity filter.

    Args:
        window (Optional[Sequence[RoundResult]]): Rounds, newest-first.

    Returns:
        int: Number of valid rounds.
    """
    return len(svcs.RoundFilteringService.valid_rounds(_window(window)))


def compute_index(window: Optional[Sequence[RoundResult]]) -> Optional[float]:
    """Computes the handicap index from a window of recent rounds.

    Only the most recent WINDOW_SIZE entries are used. Rounds failing the sanity
    filter are left out of the mean but are not removed from the window.

    Args:
        window (Optional[Sequence[RoundResult]]): Rounds, newest-first.

    Returns:
        Optional[float]: Mean strokes over par rounded half-up to one decimal, or
            None if fewer than MIN_VALID_ROUNDS rounds are valid or the result is
            outside [MIN_INDEX, MAX_INDEX].
    """
    rounds = svcs.RoundFilteringService.valid_rounds(_window(window))
    if len(rounds) < Constants.MIN_VALID_ROUNDS:
        return None

    diffs = np.array([r.score - r.par for r in rounds], dtype=float)
    hdcp = svcs.RoundingService.round_half_up(float(np.mean(diffs)), 1)

    if math.isnan(hdcp) or not Constants.MIN_INDEX <= hdcp <= Constants.MAX_INDEX:
        return None
    return hdcp


def record_round(window: Optional[Sequence[RoundResult]], new_result: RoundResult) -> Tuple[RoundResult, ...]:
    """Returns a new window with `new_result` in front, truncated to WINDOW_SIZE.

    The new round is not validated; the sanity filter only applies when the index
    is computed.
    """
    return ((new_result,) + tuple(window or ()))[:Constants.WINDOW_SIZE]


def classify_tier(index: Optional[float]) -> SkillTier:
    """Maps a handicap index to its skill tier.

    Bounds are inclusive upper bounds evaluated in order; None (or NaN) is Unrated.
    """
    if _is_missing(index):
        return TIERS["unrated"]
    for key, upper in Constants.TIER_THRESHOLDS:
        if index <= upper:
            return TIERS[key]
    return TIERS["novice"]


def recommended_allowance(index_a: Optional[float], index_b: Optional[float]) -> Allowance:
    """Recommends a stroke allowance for a match between two players.

    Args:
        index_a (Optional[float]): Handicap index of player 1.
        index_b (Optional[float]): Handicap index of player 2.

    Returns:
        Allowance: The player with the higher index (1 or 2) receives the rounded
            difference in strokes. No handicap if either index is missing or the
            rounded difference is zero.
    """
    if _is_missing(index_a) or _is_missing(index_b):
        return Allowance(False, "Not enough HDCP data")

    difference = abs(index_a - index_b)
    strokes = int(svcs.RoundingService.round_half_up(difference))
    if strokes == 0:
        return Allowance(False, "No handicap needed (evenly matched)", difference=difference)

    receiver = 1 if index_a > index_b else 2
    allowance = Allowance(
        True,
        "",
        strokes=strokes,
        receiver=receiver,
        difference=difference,
        detail=f"HDCP difference: {difference:.1f} strokes",
    )
    allowance.message = f"Player {receiver} receives {allowance.strokes_text}"
    return allowance


def _format_index(index: float) -> str:
    text = f"{index:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    if text in ("0", "-0"):
        return "0"
    return f"+{text}" if index > 0 else text


def display_index(index: Optional[float], window: Optional[Sequence[RoundResult]] = None) -> str:
    """Formats a handicap index for display.

    A valid index is shown with an explicit '+' when positive. Without one, a player
    with 1 to MIN_VALID_ROUNDS - 1 valid rounds sees how many rounds are still
    needed; every other case shows the no-data placeholder.

    Args:
        index (Optional[float]): The handicap index.
        window (Optional[Sequence[RoundResult]]): The player's recent rounds.

    Returns:
        str: Display string such as '+1.8', '-0.5', 'Computing (3 more)' or '−'.
    """
    if not _is_missing(index):
        return _format_index(index)

    count = valid_count(window)
    if 0 < count < Constants.MIN_VALID_ROUNDS:
        return Constants.COMPUTING_TEMPLATE.format(remaining=Constants.MIN_VALID_ROUNDS - count)
    return Constants.NO_DATA_SYMBOL


class TrendPoint:
    """One point of a handicap trend.

    Attributes:
        rounds (int): Number of most recent rounds the index was computed over.
        hdcp (float): The index over those rounds.
        date (Any): Date of the oldest round in the prefix.
    """

    __slots__ = ("rounds", "hdcp", "date")

    def __init__(self, rounds: int, hdcp: float, date: Any) -> None:
        self.rounds = rounds
        self.hdcp = hdcp
        self.date = date

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrendPoint):
            return NotImplemented
        return (self.rounds, self.hdcp, self.date) == (other.rounds, other.hdcp, other.date)

    def __repr__(self) -> str:
        return f"TrendPoint(rounds={self.rounds}, hdcp={self.hdcp}, date={self.date})"


class HandicapTrend:
    """Index computed over growing prefixes of a window, for charting.

    For each prefix length i from min(MIN_VALID_ROUNDS, len(window)) to len(window),
    the index over the i most recent rounds is computed; prefixes without an index
    are skipped. Iterating is lazy and can be repeated.

    Attributes:
        window (Tuple[RoundResult, ...]): The rounds the trend is computed over.
    """

    def __init__(self, window: Optional[Sequence[RoundResult]]) -> None:
        self.window: Tuple[RoundResult, ...] = tuple(window or ())

    def __iter__(self) -> Iterator[TrendPoint]:
        total = len(self.window)
        for i in range(min(Constants.MIN_VALID_ROUNDS, total), total + 1):
            prefix = self.window[:i]
            hdcp = compute_index(prefix)
            if hdcp is None:
                continue
            yield TrendPoint(i, hdcp, prefix[-1].date)

    def points(self) -> List[TrendPoint]:
        """Returns all trend points as a list."""
        return list(self)

    def to_frame(self) -> pd.DataFrame:
        """Returns the trend as a DataFrame with columns ['rounds', 'hdcp', 'date']."""
        return pd.DataFrame(
            [(p.rounds, p.hdcp, p.date) for p in self],
            columns=["rounds", "hdcp", "date"],
        )


def trend(window: Optional[Sequence[RoundResult]]) -> HandicapTrend:
    """Returns the handicap trend of a window. See HandicapTrend."""
    return HandicapTrend(window)


def estimated_index(level: Optional[str]) -> float:
    """Seed index for a player without history, from a self-reported level.

    Args:
        level (Optional[str]): 'beginner', 'intermediate' or 'advanced'.

    Returns:
        float: The estimated index; DEFAULT_ESTIMATED_INDEX for unknown levels.
    """
    if not level:
        return Constants.DEFAULT_ESTIMATED_INDEX
    return Constants.ESTIMATED_INDEX.get(level.lower(), Constants.DEFAULT_ESTIMATED_INDEX)
