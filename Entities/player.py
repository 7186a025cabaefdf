"""
Player entity module for DiscGolfHandicap.

Defines the PlayerStats class, the statistics record kept on a player's profile:
the window of recent rounds, the cached handicap index, and aggregate statistics
(total rounds, best score, average score). Every update returns a new record so the
host can persist it as a single atomic write.
"""

# ---------------- Standard library ----------------
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

# ---------------- Third-party ----------------
import numpy as np

# ---------------- Entities ----------------
from Entities.constants import Constants
from Entities.round import RoundResult
from Entities.tier import SkillTier

# ---------------- Project imports ----------------
import handicap
import services as svcs

logger = logging.getLogger("DiscGolfHandicap.player")


class PlayerStats:
    """Represents a player's profile statistics.

    Attributes:
        name (str): Player's display name.
        total_rounds (int): Number of rounds completed, all-time.
        best_score (Optional[int]): Lowest score in the current window.
        average_score (Optional[int]): Mean score in the current window, rounded half-up.
        recent_rounds (Tuple[RoundResult, ...]): Window of recent rounds, newest-first.
        hdcp (Optional[float]): Handicap index computed from recent_rounds.
    """

    def __init__(
        self,
        name: str = Constants.DEFAULT_PLAYER,
        total_rounds: int = 0,
        best_score: Optional[int] = None,
        average_score: Optional[int] = None,
        recent_rounds: Sequence[RoundResult] = (),
        hdcp: Optional[float] = None,
    ) -> None:
        self.name = name
        self.total_rounds = total_rounds
        self.best_score = best_score
        self.average_score = average_score
        self.recent_rounds: Tuple[RoundResult, ...] = tuple(recent_rounds)[:Constants.WINDOW_SIZE]
        self.hdcp = hdcp

    def __repr__(self) -> str:
        """Returns a concise string representation of the player's stats."""
        return f"PlayerStats({self.name}, rounds={self.total_rounds}, hdcp={self.hdcp})"

    def complete_round(self, result: RoundResult) -> PlayerStats:
        """Records a completed round and recomputes every derived value.

        The window, the handicap index, the round counter and the best and average
        scores are returned together in a new record.

        Args:
            result (RoundResult): The round just completed.

        Returns:
            PlayerStats: The updated statistics.
        """
        window = handicap.record_round(self.recent_rounds, result)
        for bad in svcs.RoundFilteringService.invalid_rounds(window[:1]):
            logger.warning(f"Round excluded from HDCP for {self.name}: {bad}")

        hdcp = handicap.compute_index(window)
        best_score, average_score = self._score_aggregates(window)
        if best_score is None:
            best_score, average_score = self.best_score, self.average_score

        logger.debug(
            f"{self.name}: {handicap.valid_count(window)} valid of {len(window)} recent rounds, hdcp={hdcp}"
        )
        return PlayerStats(
            name=self.name,
            total_rounds=self.total_rounds + 1,
            best_score=best_score,
            average_score=average_score,
            recent_rounds=window,
            hdcp=hdcp,
        )

    def reset(self) -> PlayerStats:
        """Returns empty statistics for the same player.

        Window, cached index and aggregates are cleared together.
        """
        return PlayerStats(name=self.name)

    @staticmethod
    def _score_aggregates(window: Sequence[RoundResult]) -> Tuple[Optional[int], Optional[int]]:
        """Best and rounded mean of the scores present in the window."""
        scores = [r.score for r in window if r is not None and r.score]
        if not scores:
            return None, None
        average = svcs.RoundingService.round_half_up(float(np.mean(scores)))
        return int(min(scores)), int(average)

    @property
    def tier(self) -> SkillTier:
        """Skill tier of the cached index."""
        return handicap.classify_tier(self.hdcp)

    @property
    def display_hdcp(self) -> str:
        """Display string of the cached index."""
        return handicap.display_index(self.hdcp, self.recent_rounds)

    def trend(self) -> handicap.HandicapTrend:
        """Handicap trend over the recent rounds."""
        return handicap.trend(self.recent_rounds)

    def to_dict(self) -> Dict[str, Any]:
        """Returns the plain mapping the host persists."""
        return {
            "name": self.name,
            "totalRounds": self.total_rounds,
            "bestScore": self.best_score,
            "averageScore": self.average_score,
            "recentScores": [r.to_dict() for r in self.recent_rounds],
            "hdcp": self.hdcp,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> PlayerStats:
        """Builds statistics from a stored mapping, filling missing keys with defaults.

        Args:
            data (Optional[Dict[str, Any]]): Stored mapping as produced by to_dict().

        Returns:
            PlayerStats: The statistics. A stored window longer than WINDOW_SIZE is truncated.
        """
        data = data or {}
        rounds = [RoundResult.from_dict(r) for r in data.get("recentScores") or [] if isinstance(r, dict)]
        return cls(
            name=data.get("name") or Constants.DEFAULT_PLAYER,
            total_rounds=int(data.get("totalRounds") or 0),
            best_score=data.get("bestScore"),
            average_score=data.get("averageScore"),
            recent_rounds=rounds,
            hdcp=data.get("hdcp"),
        )

    @classmethod
    def from_history(cls, name: str, rounds: Sequence[RoundResult]) -> PlayerStats:
        """Builds statistics by replaying a history of rounds, oldest first.

        Args:
            name (str): Player's display name.
            rounds (Sequence[RoundResult]): Rounds, newest-first.

        Returns:
            PlayerStats: Statistics after completing every round in order.
        """
        stats = cls(name=name)
        for result in reversed(tuple(rounds)):
            stats = stats.complete_round(result)
        return stats
