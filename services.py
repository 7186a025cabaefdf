"""Services for filtering, rounding and ranking disc golf round data.

This module provides utility classes for validating round summaries before they
enter a handicap computation, rounding values the way scorecards do, and ranking
players of a finished round by net score. It is intended to support the handicap
engine and the reporting pipeline.

Classes:
    RoundFilteringService:
        Applies the sanity filter for score and par to round summaries.
    RoundingService:
        Rounds half-up (away from banker's rounding) to a number of decimals.
    RankingService:
        Computes net scores from gross scores and handicaps and ranks players.

Each class consists of static methods to allow easy integration into analysis
pipelines without requiring instantiation.
"""

# pylint: disable=too-few-public-methods

import math
from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from Entities.constants import Constants
from Entities.round import RoundResult


class RoundFilteringService:
    """Utility class to separate plausible rounds from malformed ones.

    A round is valid when both score and par are present and within the
    bounds defined in Constants.
    """

    @staticmethod
    def is_valid_round(result: Optional[RoundResult]) -> bool:
        """
        Checks a round summary against the sanity filter.

        Args:
            result (Optional[RoundResult]): The round to check. None is invalid.

        Returns:
            bool: True if score and par are present and within bounds.
        """
        if result is None or result.score is None or result.par is None:
            return False
        return (
            Constants.MIN_SCORE <= result.score <= Constants.MAX_SCORE
            and Constants.MIN_PAR <= result.par <= Constants.MAX_PAR
        )

    @staticmethod
    def valid_rounds(rounds: Iterable[Optional[RoundResult]]) -> List[RoundResult]:
        """
        Keeps only rounds passing the sanity filter, preserving order.

        Args:
            rounds (Iterable[Optional[RoundResult]]): Rounds, newest-first.

        Returns:
            List[RoundResult]: Valid rounds.
        """
        return [r for r in rounds if RoundFilteringService.is_valid_round(r)]

    @staticmethod
    def invalid_rounds(rounds: Iterable[Optional[RoundResult]]) -> List[Optional[RoundResult]]:
        """
        Returns the rounds failing the sanity filter, preserving order.

        Args:
            rounds (Iterable[Optional[RoundResult]]): Rounds, newest-first.

        Returns:
            List[Optional[RoundResult]]: Malformed rounds.
        """
        return [r for r in rounds if not RoundFilteringService.is_valid_round(r)]


class RoundingService:
    """Utility class for half-up rounding.

    Python's built-in round() rounds halves to even, which turns 2.5 strokes into 2.
    Scorecards round halves up.
    """

    @staticmethod
    def round_half_up(value: float, digits: int = 0) -> float:
        """
        Rounds a value half-up (towards +inf) to the given number of decimals.

        Args:
            value (float): Value to round.
            digits (int): Number of decimals to keep.

        Returns:
            float: Rounded value. NaN and infinities are returned unchanged.
        """
        if not math.isfinite(value):
            return value
        factor = 10 ** digits
        return math.floor(value * factor + 0.5) / factor


class RankingService:
    """Utility class for ranking players of a finished round by net score.

    Net score is the gross score minus the player's handicap, rounded
    half-up to whole strokes.
    """

    @staticmethod
    def rank_players_by_net_score(
            player_names: Sequence[str],
            gross_scores: Sequence[int],
            hdcps: Sequence[Optional[float]],
            par_total: int,
        ) -> pd.DataFrame:
        """
        Computes net scores for each player and ranks them ascending.

        Args:
            player_names (Sequence[str]): Player names, aligned with gross_scores.
            gross_scores (Sequence[int]): Total strokes per player.
            hdcps (Sequence[Optional[float]]): Handicap per player. Missing counts as 0.
            par_total (int): Total par of the course played.

        Returns:
            pd.DataFrame: Columns ['name', 'gross', 'hdcp', 'net', 'net_to_par'],
                indexed by rank starting at 1, sorted by net score.

        Raises:
            ValueError: If the input sequences differ in length.
        """
        if not len(player_names) == len(gross_scores) == len(hdcps):
            raise ValueError("player_names, gross_scores and hdcps must have the same length.")

        hdcp_values = np.array(
            [0.0 if h is None or pd.isna(h) else float(h) for h in hdcps], dtype=float
        )
        gross = np.array(gross_scores, dtype=float)
        net = np.floor(gross - hdcp_values + 0.5).astype(int)

        df = pd.DataFrame({
            "name": list(player_names),
            "gross": gross.astype(int),
            "hdcp": hdcp_values,
            "net": net,
            "net_to_par": net - par_total,
        })
        df = df.sort_values("net", kind="stable").reset_index(drop=True)
        df.index = range(1, len(df) + 1)
        df.index.name = "rank"
        return df
