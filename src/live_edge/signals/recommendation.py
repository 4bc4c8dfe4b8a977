"""Bet-type recommendation (moneyline vs spread) from margin and time left."""

from __future__ import annotations

from dataclasses import dataclass

from live_edge.analysis.clock import minutes_remaining
from live_edge.leagues import LeagueConfig


@dataclass
class Recommendation:
    bet_type: str  # "ML", "SPREAD" or "WATCH"
    margin: int
    minutes_remaining: int
    units: float = 0.0


def recommend(
    league: LeagueConfig,
    away_score: int,
    home_score: int,
    period: int,
    clock: str,
    signal_level: int = 2,
) -> Recommendation:
    margin = abs(home_score - away_score)
    remaining = minutes_remaining(league, period, clock)
    watch = Recommendation("WATCH", margin, round(remaining))

    if period >= league.overtime_period or remaining < 3 or signal_level < 2:
        return watch

    if margin <= 5:
        bet_type, units = "ML", 1.5
    elif margin <= 10:
        bet_type, units = "SPREAD", 1.5
    elif margin <= 20:
        bet_type, units = "SPREAD", 1.0
    else:
        return watch

    # Late game: no moneylines, no big-margin spreads, smaller size
    if remaining < 6:
        if bet_type == "ML":
            bet_type = "SPREAD"
        elif margin > 15:
            return watch
        units = min(units, 1.0)

    return Recommendation(bet_type, margin, round(remaining), units)
