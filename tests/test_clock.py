"""Tests for game clock arithmetic, urgency tiers and period labels."""

from __future__ import annotations

import pytest

from live_edge.analysis.clock import elapsed_fraction, elapsed_minutes, minutes_remaining
from live_edge.analysis.urgency import UrgencyTier, classify_urgency
from live_edge.leagues import NBA, NCAAB, get_league, resolve_modes


class TestElapsed:
    def test_nba_third_quarter(self):
        assert elapsed_minutes(NBA, 3, "6:00") == pytest.approx(30.0)
        assert elapsed_fraction(NBA, 3, "6:00") == pytest.approx(0.625)

    def test_ncaab_second_half(self):
        assert elapsed_minutes(NCAAB, 2, "10:00") == pytest.approx(30.0)
        assert elapsed_fraction(NCAAB, 2, "10:00") == pytest.approx(0.75)

    def test_seconds_only_clock(self):
        assert elapsed_minutes(NBA, 4, "45.0") == pytest.approx(47.25)

    def test_empty_clock_is_end_of_period(self):
        assert elapsed_minutes(NBA, 1, "") == pytest.approx(12.0)

    def test_before_tipoff(self):
        assert elapsed_minutes(NBA, 0, "12:00") == 0.0

    def test_overtime_fraction_capped(self):
        assert elapsed_minutes(NBA, 5, "2:00") == pytest.approx(51.0)
        assert elapsed_fraction(NBA, 5, "2:00") == 1.0
        assert minutes_remaining(NBA, 5, "2:00") == 0.0


@pytest.mark.parametrize(
    "fraction,tier,multiplier",
    [
        (0.0, UrgencyTier.DEVELOPING, 0.70),
        (0.29, UrgencyTier.DEVELOPING, 0.70),
        (0.30, UrgencyTier.PRIME, 1.00),
        (0.59, UrgencyTier.PRIME, 1.00),
        (0.60, UrgencyTier.ACT_NOW, 0.85),
        (0.84, UrgencyTier.ACT_NOW, 0.85),
        (0.85, UrgencyTier.CLOSING, 0.50),
        (1.0, UrgencyTier.CLOSING, 0.50),
    ],
)
def test_urgency_tiers(fraction, tier, multiplier):
    urgency = classify_urgency(fraction)
    assert urgency.tier is tier
    assert urgency.multiplier == multiplier


class TestLeagues:
    def test_period_labels(self):
        assert NBA.period_label(3) == "Q3"
        assert NBA.period_label(5) == "Q5"
        assert NCAAB.period_label(2) == "H2"
        assert NCAAB.period_label(3) == "OT1"

    def test_home_court_only_ncaab(self):
        assert NCAAB.home_court_enabled
        assert not NBA.home_court_enabled

    def test_get_league(self):
        assert get_league("NBA") is NBA
        with pytest.raises(ValueError, match="Unknown league"):
            get_league("wnba")

    def test_resolve_modes(self):
        assert resolve_modes("both") == [NBA, NCAAB]
        assert resolve_modes("ncaab") == [NCAAB]
