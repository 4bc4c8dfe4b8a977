"""Static per-league parameters.

One ``LeagueConfig`` value per monitored league. Shared analysis code reads
thresholds from here and never branches on which league it is looking at.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameWindow:
    """An elapsed-time window, bounded by game minutes and/or period numbers."""

    min_minutes: float | None = None
    max_minutes: float | None = None
    min_period: int | None = None
    max_period: int | None = None

    def contains(self, elapsed_minutes: float, period: int) -> bool:
        if self.min_minutes is not None and elapsed_minutes < self.min_minutes:
            return False
        if self.max_minutes is not None and elapsed_minutes > self.max_minutes:
            return False
        if self.min_period is not None and period < self.min_period:
            return False
        if self.max_period is not None and period > self.max_period:
            return False
        return True


@dataclass(frozen=True)
class FragileProfile:
    """Thresholds for the three-point-fragile category.

    Attributes:
        hot_checks: (3PT percentage, attempts) pairs; any pair met makes the
            team "hot" from deep
        min_lead: Smallest lead that qualifies
        max_lead: Largest lead that qualifies
        min_score: Minimum team score
        fragile_pct: Minimum share of points from threes (percent)
    """

    hot_checks: tuple[tuple[float, int], ...]
    min_lead: int
    max_lead: int
    min_score: int
    fragile_pct: float

    def is_hot(self, three_pct: float, three_attempts: int) -> bool:
        return any(
            three_pct >= pct and three_attempts >= attempts
            for pct, attempts in self.hot_checks
        )


@dataclass(frozen=True)
class CoilProfile:
    """Thresholds for the star-coil category.

    Attributes:
        max_pace: Star must be below this fraction of expected points
        max_margin: Largest game margin that qualifies
        window: Elapsed-time window in which the check runs
        accept_weak: Whether a ``weak`` supporting cast still counts
    """

    max_pace: float
    max_margin: int
    window: GameWindow
    accept_weak: bool = False


@dataclass(frozen=True)
class LeagueConfig:
    mode: str
    name: str
    scoreboard_path: str
    odds_sport: str
    total_minutes: float
    period_length: float
    regulation_periods: int
    overtime_period: int
    period_prefix: str
    fragile_threshold: float
    engine_threshold: float
    star_ppg_min: float
    strict_fragile: FragileProfile
    soft_fragile: FragileProfile
    strict_coil: CoilProfile
    soft_coil: CoilProfile
    home_court_boost: float = 0.0
    label_overtime: bool = False

    @property
    def home_court_enabled(self) -> bool:
        return self.home_court_boost > 0

    def period_label(self, period: int) -> str:
        """Human label for a period number, e.g. ``Q3``, ``H2``, ``OT1``."""
        if self.label_overtime and period > self.regulation_periods:
            return f"OT{period - self.regulation_periods}"
        return f"{self.period_prefix}{period}"


NBA = LeagueConfig(
    mode="nba",
    name="NBA",
    scoreboard_path="nba",
    odds_sport="basketball_nba",
    total_minutes=48,
    period_length=12,
    regulation_periods=4,
    overtime_period=5,
    period_prefix="Q",
    fragile_threshold=42,
    engine_threshold=1.3,
    star_ppg_min=21,
    strict_fragile=FragileProfile(
        hot_checks=((50, 12), (55, 8)),
        min_lead=3,
        max_lead=15,
        min_score=20,
        fragile_pct=42,
    ),
    soft_fragile=FragileProfile(
        hot_checks=((45, 10), (50, 8)),
        min_lead=2,
        max_lead=18,
        min_score=15,
        fragile_pct=38,
    ),
    strict_coil=CoilProfile(
        max_pace=0.65,
        max_margin=15,
        window=GameWindow(min_period=2, max_period=3),
    ),
    soft_coil=CoilProfile(
        max_pace=0.75,
        max_margin=18,
        window=GameWindow(min_period=1, max_period=3),
        accept_weak=False,
    ),
    home_court_boost=0.0,
)

NCAAB = LeagueConfig(
    mode="ncaab",
    name="NCAAB",
    scoreboard_path="mens-college-basketball",
    odds_sport="basketball_ncaab",
    total_minutes=40,
    period_length=20,
    regulation_periods=2,
    overtime_period=3,
    period_prefix="H",
    fragile_threshold=40,
    engine_threshold=1.1,
    star_ppg_min=16,
    strict_fragile=FragileProfile(
        hot_checks=((48, 10), (52, 7)),
        min_lead=3,
        max_lead=12,
        min_score=20,
        fragile_pct=40,
    ),
    soft_fragile=FragileProfile(
        hot_checks=((40, 7), (45, 5)),
        min_lead=2,
        max_lead=18,
        min_score=12,
        fragile_pct=36,
    ),
    strict_coil=CoilProfile(
        max_pace=0.65,
        max_margin=12,
        window=GameWindow(min_minutes=8, max_minutes=35),
    ),
    soft_coil=CoilProfile(
        max_pace=0.80,
        max_margin=18,
        window=GameWindow(min_minutes=4, max_minutes=37),
        accept_weak=True,
    ),
    home_court_boost=0.5,
    label_overtime=True,
)

LEAGUES: dict[str, LeagueConfig] = {NBA.mode: NBA, NCAAB.mode: NCAAB}


def get_league(mode: str) -> LeagueConfig:
    """Look up a league by mode name (``nba`` or ``ncaab``)."""
    try:
        return LEAGUES[mode.lower()]
    except KeyError:
        raise ValueError(f"Unknown league mode: {mode!r}") from None


def resolve_modes(arg: str) -> list[LeagueConfig]:
    """Expand a CLI league argument; ``both`` means every league."""
    if arg.lower() == "both":
        return list(LEAGUES.values())
    return [get_league(arg)]
