"""
constants.py
------------

Defines the `Constants` class used across the DiscGolfHandicap project.

Holds global constants for the handicap window, round sanity bounds, skill tier
thresholds and display data, and plotting defaults used in player reports.
"""

# ---------------- Standard library ----------------
from __future__ import annotations

class Constants:
    """Global constants for handicap computation, tiers, and plotting defaults.

    Attributes:
        WINDOW_SIZE (int): Number of recent rounds kept per player.
        MIN_VALID_ROUNDS (int): Minimum valid rounds required for an index.

        MIN_SCORE (int): Lowest plausible round score.
        MAX_SCORE (int): Highest plausible round score.
        MIN_PAR (int): Lowest plausible course par.
        MAX_PAR (int): Highest plausible course par.
        MIN_INDEX (float): Lowest accepted handicap index.
        MAX_INDEX (float): Highest accepted handicap index.

        NO_DATA_SYMBOL (str): Placeholder shown when no index is available.
        COMPUTING_TEMPLATE (str): Message shown while rounds are still missing.

        TIER_THRESHOLDS (tuple[tuple[str, float], ...]): Inclusive upper bounds per tier.
        TIER_DATA (dict[str, tuple[str, str, str]]): Label, color and description per tier.
        ESTIMATED_INDEX (dict[str, float]): Seed index per self-reported level.
        DEFAULT_ESTIMATED_INDEX (float): Seed index for unknown levels.

        DEFAULT_PLAYER (str): Player name used when the data has no name column.
        FIGURE_SIZE_MEDIUM (tuple[int, int]): Standard medium figure size.
        TREND_COLOR (str): Line color for handicap trend plots.
    """

    # Window
    WINDOW_SIZE = 20
    MIN_VALID_ROUNDS = 5

    # Sanity bounds
    MIN_SCORE = 18
    MAX_SCORE = 200
    MIN_PAR = 18
    MAX_PAR = 100
    MIN_INDEX = -30.0
    MAX_INDEX = 50.0

    # Display
    NO_DATA_SYMBOL = "−"
    COMPUTING_TEMPLATE = "Computing ({remaining} more)"

    # Tiers, evaluated in order
    TIER_THRESHOLDS = (
        ("pro", 0.0),
        ("advanced", 3.0),
        ("intermediate", 6.0),
        ("beginner", 10.0),
    )
    TIER_DATA = {
        "pro": ("Pro", "#FFD700", "Plays at or under par"),
        "advanced": ("Advanced", "#4CAF50", "Consistent scoring"),
        "intermediate": ("Intermediate", "#2196F3", "Steadily improving"),
        "beginner": ("Beginner", "#FF9800", "Learning the fundamentals"),
        "novice": ("Novice", "#9C27B0", "Practicing and having fun"),
        "unrated": ("Unrated", "#999999", "Not enough round data"),
    }

    ESTIMATED_INDEX = {
        "beginner": 10.0,
        "intermediate": 5.0,
        "advanced": 0.0,
    }
    DEFAULT_ESTIMATED_INDEX = 5.0

    # Reporting defaults
    DEFAULT_PLAYER = "Player 1"
    FIGURE_SIZE_MEDIUM = (8, 4)
    TREND_COLOR = "#092640"
