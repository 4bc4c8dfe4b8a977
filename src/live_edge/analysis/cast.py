"""Supporting cast analysis for star-carried teams."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from live_edge.analysis.clock import expected_by_time
from live_edge.leagues import LeagueConfig

STRONG_CAST_GAP = -8
MODERATE_CAST_GAP = -15


class CastStrength(Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


@dataclass
class CastAnalysis:
    """How the rest of the roster is holding up without the star's output.

    Attributes:
        cast_score: Team points minus the star's points
        cast_gap: Cast score minus the opponent's score
        star_expected: Star's season rate scaled to minutes played
        star_deficit: Shortfall versus that expectation (never negative)
        regression_flips: Star reverting to expectation alone would erase
            a negative cast gap
        strength: Partition of the cast gap into strong/moderate/weak
    """

    cast_score: float
    cast_gap: float
    star_expected: float
    star_deficit: float
    regression_flips: bool
    strength: CastStrength

    @property
    def strong(self) -> bool:
        return self.strength is CastStrength.STRONG

    @property
    def moderate(self) -> bool:
        return self.strength is CastStrength.MODERATE


def classify_cast_gap(cast_gap: float) -> CastStrength:
    if cast_gap >= STRONG_CAST_GAP:
        return CastStrength.STRONG
    if cast_gap >= MODERATE_CAST_GAP:
        return CastStrength.MODERATE
    return CastStrength.WEAK


def analyze_supporting_cast(
    league: LeagueConfig,
    star_points: float,
    team_score: float,
    opponent_score: float,
    star_ppg: float,
    elapsed: float,
) -> CastAnalysis:
    cast_score = team_score - star_points
    cast_gap = cast_score - opponent_score
    star_expected = expected_by_time(league, star_ppg, elapsed)
    star_deficit = max(0.0, star_expected - star_points)
    regression_flips = cast_gap < 0 and star_deficit > abs(cast_gap)
    return CastAnalysis(
        cast_score=cast_score,
        cast_gap=cast_gap,
        star_expected=star_expected,
        star_deficit=star_deficit,
        regression_flips=regression_flips,
        strength=classify_cast_gap(cast_gap),
    )
