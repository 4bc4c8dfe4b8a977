"""Tests for scoring durability classification."""

from __future__ import annotations

import pytest

from live_edge.analysis.durability import analyze_scoring_durability
from live_edge.leagues import NBA, NCAAB


@pytest.mark.parametrize(
    "score,three_made,opp,fragile",
    [
        (40, 6, 35, True),    # 45% from three, leading
        (50, 7, 45, True),    # exactly 42%
        (50, 6, 45, False),   # 36%
        (40, 6, 45, False),   # trailing
        (40, 6, 40, False),   # tied is not leading
        (20, 3, 10, True),    # exactly 20 points
        (19, 5, 10, False),   # under 20 points
    ],
)
def test_nba_fragile_table(score, three_made, opp, fragile):
    result = analyze_scoring_durability(NBA, score, three_made, opp)
    assert result.fragile is fragile


def test_share_and_split():
    result = analyze_scoring_durability(NBA, 40, 6, 35)
    assert result.pct3 == pytest.approx(45.0)
    assert result.pts3 == 18
    assert result.non_three_pts == 22


def test_league_threshold_differs():
    # 12 of 30 points from three is exactly 40%
    assert analyze_scoring_durability(NCAAB, 30, 4, 20).fragile
    assert not analyze_scoring_durability(NBA, 30, 4, 20).fragile


def test_zero_score():
    result = analyze_scoring_durability(NBA, 0, 0, 0)
    assert result.pct3 == 0.0
    assert not result.fragile


def test_garbage_inputs_count_as_zero():
    result = analyze_scoring_durability(NBA, "abc", None, "x")
    assert result.pct3 == 0.0
    assert not result.fragile


@pytest.mark.parametrize("value", ["Infinity", "inf", "-inf", 1e400, float("nan")])
def test_non_finite_inputs_count_as_zero(value):
    result = analyze_scoring_durability(NBA, value, value, 10)
    assert result.pct3 == 0.0
    assert not result.fragile


def test_numeric_strings_accepted():
    result = analyze_scoring_durability(NBA, "40", "6", "35")
    assert result.fragile
