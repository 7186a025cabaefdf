"""
Verifies handicap index computation, window bookkeeping, tier classification,
stroke allowances, display strings, and the handicap trend.
"""

import math

import pytest

import handicap
from Entities.constants import Constants
from Entities.round import RoundResult
from conftest import make_round, make_window


# ============================================================================
# compute_index
# ============================================================================


class TestComputeIndex:
    def test_repeated_calls_return_same_result(self):
        window = make_window([1, 2, 2, 3, 2, 5, -1])
        results = {handicap.compute_index(window) for _ in range(5)}
        assert len(results) == 1

    def test_four_valid_rounds_is_not_enough(self):
        assert handicap.compute_index(make_window([2, 2, 2, 2])) is None

    def test_five_valid_rounds_gives_index(self):
        assert handicap.compute_index(make_window([2, 2, 2, 2, 2])) == 2.0

    def test_empty_window(self):
        assert handicap.compute_index(()) is None
        assert handicap.compute_index(None) is None

    def test_mean_of_diffs(self):
        assert handicap.compute_index(make_window([1, 2, 2, 3, 2])) == 2.0
        assert handicap.compute_index(make_window([1, 1, 2, 2, 3])) == 1.8

    def test_rounds_half_up_to_one_decimal(self):
        """Mean 0.25 rounds to 0.3, not to the even 0.2."""
        window = make_window([0, 0, 1, 0, 0, 0, 0, 1])
        assert handicap.compute_index(window) == 0.3

    def test_negative_half_rounds_towards_positive(self):
        """Mean -0.25 rounds to -0.2."""
        window = make_window([0, 0, -1, 0, 0, 0, 0, -1])
        assert handicap.compute_index(window) == -0.2

    def test_malformed_round_is_ignored(self):
        clean = make_window([1, 1, 2, 2, 3])
        with_bad = clean[:2] + (RoundResult(10, 54),) + clean[2:]
        assert len(with_bad) == 6
        assert handicap.compute_index(with_bad) == handicap.compute_index(clean) == 1.8

    @pytest.mark.parametrize(
        "bad_round",
        [
            RoundResult(None, 54),
            RoundResult(60, None),
            RoundResult(float("nan"), 54),
            RoundResult(201, 54),
            RoundResult(60, 17),
            RoundResult(60, 101),
            RoundResult("sixty", 54),
            None,
        ],
    )
    def test_sanity_filter_drops(self, bad_round):
        window = (bad_round,) + make_window([2, 2, 2, 2])
        assert handicap.compute_index(window) is None
        assert handicap.valid_count(window) == 4

    def test_sanity_bounds_are_inclusive(self):
        window = (RoundResult(18, 18), RoundResult(200, 100)) + make_window([0, 0, 0])
        assert handicap.valid_count(window) == 5

    def test_only_most_recent_twenty_are_used(self):
        window = make_window([0] * 20 + [10, 10, 10])
        assert handicap.compute_index(window) == 0.0

    def test_index_above_upper_bound_is_rejected(self):
        window = tuple(RoundResult(160, 100) for _ in range(5))
        assert handicap.valid_count(window) == 5
        assert handicap.compute_index(window) is None

    def test_index_below_lower_bound_is_rejected(self):
        window = tuple(RoundResult(30, 70) for _ in range(5))
        assert handicap.compute_index(window) is None

    def test_index_at_bounds_is_accepted(self):
        assert handicap.compute_index(tuple(RoundResult(150, 100) for _ in range(5))) == 50.0
        assert handicap.compute_index(tuple(RoundResult(40, 70) for _ in range(5))) == -30.0


# ============================================================================
# record_round
# ============================================================================


class TestRecordRound:
    def test_prepends_new_round(self):
        first = make_round(1)
        second = make_round(2)
        window = handicap.record_round(handicap.record_round((), first), second)
        assert window == (second, first)

    def test_window_is_bounded_and_most_recent_first(self):
        window = ()
        rounds = [make_round(i % 7, date=f"2025-02-{i + 1:02d}") for i in range(27)]
        for r in rounds:
            window = handicap.record_round(window, r)
            assert len(window) <= Constants.WINDOW_SIZE
        assert window == tuple(reversed(rounds))[:20]

    def test_does_not_mutate_input(self):
        original = [make_round(1)]
        handicap.record_round(original, make_round(2))
        assert len(original) == 1

    def test_malformed_round_occupies_slot(self):
        window = handicap.record_round(make_window([1]), RoundResult(10, 54))
        assert len(window) == 2
        assert handicap.valid_count(window) == 1


# ============================================================================
# classify_tier
# ============================================================================


class TestClassifyTier:
    @pytest.mark.parametrize(
        ("index", "label"),
        [
            (-5.0, "Pro"),
            (0.0, "Pro"),
            (0.1, "Advanced"),
            (3.0, "Advanced"),
            (3.1, "Intermediate"),
            (6.0, "Intermediate"),
            (6.1, "Beginner"),
            (10.0, "Beginner"),
            (10.1, "Novice"),
            (None, "Unrated"),
            (float("nan"), "Unrated"),
        ],
    )
    def test_boundaries(self, index, label):
        assert handicap.classify_tier(index).label == label

    def test_tier_carries_display_data(self):
        tier = handicap.classify_tier(0.0)
        assert tier.key == "pro"
        assert tier.color == "#FFD700"
        assert tier.description


# ============================================================================
# recommended_allowance
# ============================================================================


class TestRecommendedAllowance:
    def test_symmetric(self):
        forward = handicap.recommended_allowance(5, 2)
        backward = handicap.recommended_allowance(2, 5)
        assert forward.strokes == backward.strokes == 3
        assert forward.receiver == 1
        assert backward.receiver == 2
        assert forward.has_handicap and backward.has_handicap

    def test_missing_index(self):
        for a, b in [(None, 2.0), (2.0, None), (None, None)]:
            allowance = handicap.recommended_allowance(a, b)
            assert not allowance.has_handicap
            assert allowance.strokes is None
            assert "Not enough" in allowance.message

    def test_small_difference_needs_no_handicap(self):
        allowance = handicap.recommended_allowance(2.0, 2.4)
        assert not allowance.has_handicap
        assert allowance.strokes is None
        assert "evenly matched" in allowance.message

    def test_half_stroke_rounds_up(self):
        allowance = handicap.recommended_allowance(3.5, 1.0)
        assert allowance.strokes == 3
        assert allowance.receiver == 1
        assert allowance.difference == pytest.approx(2.5)
        assert allowance.detail == "HDCP difference: 2.5 strokes"

    def test_message_names_receiver(self):
        allowance = handicap.recommended_allowance(-1.0, 0.2)
        assert allowance.strokes == 1
        assert allowance.receiver == 2
        assert allowance.message == "Player 2 receives 1 stroke"


# ============================================================================
# display_index
# ============================================================================


class TestDisplayIndex:
    @pytest.mark.parametrize(
        ("index", "expected"),
        [(1.0, "+1"), (1.8, "+1.8"), (12.3, "+12.3"), (0.0, "0"), (-0.0, "0"), (-0.5, "-0.5"), (-3.0, "-3"), (1234567.0, "+1234567"), (-12.34, "-12.3")],
    )
    def test_valid_index(self, index, expected):
        assert handicap.display_index(index, ()) == expected

    def test_no_data(self):
        assert handicap.display_index(None, ()) == Constants.NO_DATA_SYMBOL
        assert handicap.display_index(None, None) == Constants.NO_DATA_SYMBOL

    def test_only_malformed_rounds(self):
        window = (RoundResult(10, 54), RoundResult(None, 54))
        assert handicap.display_index(None, window) == Constants.NO_DATA_SYMBOL

    @pytest.mark.parametrize(("valid", "remaining"), [(1, 4), (3, 2), (4, 1)])
    def test_computing(self, valid, remaining):
        window = make_window([1] * valid) + (RoundResult(10, 54),)
        assert handicap.display_index(None, window) == f"Computing ({remaining} more)"

    def test_enough_rounds_but_invalid_index(self):
        window = tuple(RoundResult(160, 100) for _ in range(5))
        index = handicap.compute_index(window)
        assert index is None
        assert handicap.display_index(index, window) == Constants.NO_DATA_SYMBOL


# ============================================================================
# trend
# ============================================================================


class TestTrend:
    def test_one_point_per_prefix(self):
        window = make_window([1, 2, 3, 1, 2, 3, 1, 2])
        points = handicap.trend(window).points()
        assert [p.rounds for p in points] == [5, 6, 7, 8]
        assert all(p.hdcp is not None for p in points)

    def test_point_values_and_dates(self):
        window = make_window([1, 2, 3, 1, 2, 3])
        points = handicap.trend(window).points()
        assert points[0].hdcp == handicap.compute_index(window[:5])
        assert points[0].date == window[4].date
        assert points[1].hdcp == handicap.compute_index(window)
        assert points[1].date == window[5].date

    def test_restartable(self):
        trend = handicap.trend(make_window([1, 2, 3, 4, 5, 6]))
        assert list(trend) == list(trend)
        assert len(list(trend)) == 2

    def test_short_window_has_no_points(self):
        assert handicap.trend(make_window([1, 2, 3])).points() == []
        assert handicap.trend(()).points() == []

    def test_prefixes_without_index_are_skipped(self):
        window = make_window([1, 1, 1, 1]) + (RoundResult(10, 54),) + make_window([1])
        points = handicap.trend(window).points()
        assert [p.rounds for p in points] == [6]
        assert points[0].hdcp == 1.0

    def test_to_frame(self):
        df = handicap.trend(make_window([1, 2, 3, 1, 2, 3, 1])).to_frame()
        assert list(df.columns) == ["rounds", "hdcp", "date"]
        assert df["rounds"].tolist() == [5, 6, 7]

    def test_empty_frame(self):
        df = handicap.trend(()).to_frame()
        assert df.empty
        assert list(df.columns) == ["rounds", "hdcp", "date"]


# ============================================================================
# estimated_index
# ============================================================================


class TestEstimatedIndex:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [("beginner", 10.0), ("intermediate", 5.0), ("advanced", 0.0), ("Advanced", 0.0), ("pro", 5.0), (None, 5.0)],
    )
    def test_levels(self, level, expected):
        assert handicap.estimated_index(level) == expected


# ============================================================================
# End to end
# ============================================================================


def test_five_rounds_from_empty_window():
    window = ()
    for diff in [3, -1, 0, 2, 1]:
        window = handicap.record_round(window, make_round(diff))

    index = handicap.compute_index(window)
    assert index == 1.0
    assert not math.isnan(index)
    assert handicap.classify_tier(index).label == "Advanced"
    assert handicap.display_index(index, window) == "+1"


# ============================================================================
# Non-finite and fractional values
# ============================================================================


class TestUnusableValues:
    @pytest.mark.parametrize("score", [float("inf"), float("-inf"), "inf", 60.9, "60.5"])
    def test_unusable_score_is_missing(self, score):
        assert RoundResult(score, 54).score is None

    def test_unusable_par_is_missing(self):
        assert RoundResult(60, float("inf")).par is None
        assert RoundResult(60, 54.5).par is None

    def test_whole_float_is_kept(self):
        assert RoundResult(60.0, "54").score == 60
        assert RoundResult(60.0, "54").par == 54

    def test_infinite_score_is_excluded_from_index(self):
        window = (RoundResult(float("inf"), 54),) + make_window([2] * 5)
        assert handicap.compute_index(window) == 2.0
        assert handicap.valid_count(window) == 5

    def test_fractional_score_is_excluded_from_index(self):
        window = (RoundResult(60.5, 54),) + make_window([2] * 4)
        assert handicap.compute_index(window) is None
        assert handicap.valid_count(window) == 4
