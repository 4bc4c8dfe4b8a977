"""Game clock arithmetic."""

from __future__ import annotations

from live_edge.common.types import to_float
from live_edge.leagues import LeagueConfig


def _clock_minutes(clock: str) -> float:
    """Minutes left on a period clock.

    Accepts ``"M:SS"`` and the seconds-only form (``"45.2"``) shown in the
    final minute. Unparseable input counts as 0:00.
    """
    text = (clock or "").strip()
    if not text:
        return 0.0
    if ":" in text:
        minutes, _, seconds = text.partition(":")
        return to_float(minutes) + to_float(seconds) / 60.0
    return to_float(text) / 60.0


def elapsed_minutes(league: LeagueConfig, period: int, clock: str) -> float:
    """Game minutes played so far, treating every period as regulation length."""
    if period <= 0:
        return 0.0
    remaining_in_period = min(_clock_minutes(clock), league.period_length)
    return (period - 1) * league.period_length + (league.period_length - remaining_in_period)


def elapsed_fraction(league: LeagueConfig, period: int, clock: str) -> float:
    """Fraction of regulation played, capped at 1."""
    return min(elapsed_minutes(league, period, clock) / league.total_minutes, 1.0)


def minutes_remaining(league: LeagueConfig, period: int, clock: str) -> float:
    return max(0.0, league.total_minutes - elapsed_minutes(league, period, clock))


def expected_by_time(league: LeagueConfig, per_game: float, minutes: float) -> float:
    """Season per-game output scaled linearly to ``minutes`` played."""
    return per_game * (minutes / league.total_minutes)
