"""Game snapshot data models."""

from __future__ import annotations

from dataclasses import dataclass, field

from live_edge.common.types import Side


@dataclass
class ScoringLeader:
    """A team's points leader as reported by the feed."""

    name: str
    points: float
    team: str  # team abbreviation


@dataclass
class ShootingLine:
    """Per-team shooting splits. Percentages are 0-100."""

    fg_made: int = 0
    fg_attempted: int = 0
    three_made: int = 0
    three_attempted: int = 0
    three_pct: float = 0.0
    ft_made: int = 0
    ft_attempted: int = 0


@dataclass
class TeamState:
    """One side of a live game."""

    abbr: str
    name: str
    score: int
    shooting: ShootingLine = field(default_factory=ShootingLine)
    leaders: list[ScoringLeader] = field(default_factory=list)


@dataclass
class GameSnapshot:
    """Normalized per-poll view of one live event.

    Rebuilt from the feed on every poll and never persisted on its own.
    """

    event_id: str
    away: TeamState
    home: TeamState
    period: int
    clock: str

    @property
    def label(self) -> str:
        return f"{self.away.abbr} @ {self.home.abbr}"

    @property
    def margin(self) -> int:
        return abs(self.away.score - self.home.score)

    def team(self, side: Side) -> TeamState:
        return self.away if side == "away" else self.home

    def opponent(self, side: Side) -> TeamState:
        return self.home if side == "away" else self.away

    def lead(self, side: Side) -> int:
        """Points by which ``side`` leads (negative when trailing)."""
        return self.team(side).score - self.opponent(side).score

    def side_of(self, abbr: str) -> Side | None:
        if abbr == self.away.abbr:
            return "away"
        if abbr == self.home.abbr:
            return "home"
        return None

    @property
    def trailing_side(self) -> Side:
        """The side currently behind; home when the score is level."""
        return "away" if self.away.score < self.home.score else "home"


@dataclass
class FinalScore:
    """A completed event's final result."""

    event_id: str
    away_abbr: str
    home_abbr: str
    away_score: int
    home_score: int


@dataclass
class ScoreboardUpdate:
    """One scoreboard poll: games in progress plus games already final."""

    live: list[GameSnapshot] = field(default_factory=list)
    completed: list[FinalScore] = field(default_factory=list)
