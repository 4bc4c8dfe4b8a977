"""Scoring durability: how much of a lead rests on three-point shooting."""

from __future__ import annotations

from dataclasses import dataclass

from live_edge.common.types import to_int
from live_edge.leagues import LeagueConfig

# A lead built on fewer points than this is too early to call fragile
MIN_FRAGILE_SCORE = 20


@dataclass
class Durability:
    pct3: float  # share of points from threes, 0-100
    fragile: bool
    pts3: int = 0
    non_three_pts: int = 0


def analyze_scoring_durability(
    league: LeagueConfig,
    score: object,
    three_made: object,
    opponent_score: object,
) -> Durability:
    """Classify a team's scoring as fragile (three-point dependent) or not.

    Fragile requires the three-point share to meet the league threshold, the
    team to be leading, and at least ``MIN_FRAGILE_SCORE`` points on the
    board. Unparseable inputs count as zero.
    """
    s = to_int(score)
    made = to_int(three_made)
    if s <= 0:
        return Durability(pct3=0.0, fragile=False)

    pts3 = made * 3
    pct3 = pts3 / s * 100
    leading = s > to_int(opponent_score)
    fragile = pct3 >= league.fragile_threshold and leading and s >= MIN_FRAGILE_SCORE
    return Durability(pct3=pct3, fragile=fragile, pts3=pts3, non_three_pts=s - pts3)
