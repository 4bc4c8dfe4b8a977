"""Signal data models."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum

from live_edge.common.types import Side


class SignalType(Enum):
    THREE_PT_FRAGILE = "3pt_fragile"
    STAR_COIL = "star_coil"


class CoilTier(Enum):
    ELITE = "elite"
    STANDARD = "standard"
    WEAK = "weak"
    LOCKED = "locked"


class SignalStatus(Enum):
    OPEN = "open"
    RESOLVED = "resolved"


@dataclass
class Evidence:
    """One piece of raw evidence behind a pick.

    Attributes:
        signal_type: Category the evidence belongs to
        team: Abbreviation of the team the evidence is about
        text: Human-readable explanation
        strong: Whether it carries fade weight on its own
        soft: Found with loosened thresholds
    """

    signal_type: SignalType
    team: str
    text: str
    strong: bool = True
    soft: bool = False

    def to_dict(self) -> dict:
        return {
            "type": self.signal_type.value,
            "team": self.team,
            "text": self.text,
            "strong": self.strong,
            "soft": self.soft,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Evidence:
        return cls(
            signal_type=SignalType(data["type"]),
            team=data.get("team", ""),
            text=data.get("text", ""),
            strong=bool(data.get("strong", True)),
            soft=bool(data.get("soft", False)),
        )


@dataclass
class Pick:
    """Aggregator output for one game: which side to bet and how strongly."""

    bet_side: Side
    bet_team: str
    fade_team: str
    signal_types: list[SignalType]
    evidence: list[Evidence]
    is_combined: bool
    signal_count: int
    home_court_edge: bool
    away_fade: float
    home_fade: float
    conflicted: bool = False


@dataclass
class Signal:
    """A recommendation issued for one game, tracked until the game is final.

    Identity is ``key`` (event, bet team, league, UTC issue hour). Fields
    from ``lec_5`` on are filled in after issuance; resolution is terminal.
    """

    key: str
    event_id: str
    league: str
    game: str
    away_team: str
    home_team: str
    away_full: str
    home_full: str
    away_score: int
    home_score: int
    period: int
    clock: str
    period_label: str
    bet_side: Side
    bet_team: str
    bet_team_full: str
    fade_team: str
    fade_team_full: str
    signal_types: list[str]
    evidence: list[Evidence]
    signal_count: int
    is_combined: bool
    urgency: str
    home_court_edge: bool
    rec_type: str
    rec_margin: int
    rec_minutes_remaining: int
    market_price: int
    has_live_odds: bool
    quote_key: str | None
    implied_prob: float
    kelly_pct: float
    kelly_stake: float
    est_win_prob: float
    est_edge: float
    issued_at: datetime
    lec_5: int | None = None
    lec_10: int | None = None
    final_away_score: int | None = None
    final_home_score: int | None = None
    result: str | None = None  # "WIN" or "LOSS"
    pnl: float | None = None
    resolved_at: datetime | None = None
    status: SignalStatus = SignalStatus.OPEN

    @property
    def is_open(self) -> bool:
        return self.status is SignalStatus.OPEN

    def to_dict(self) -> dict:
        data = asdict(self)
        data["evidence"] = [e.to_dict() for e in self.evidence]
        data["issued_at"] = self.issued_at.isoformat()
        data["resolved_at"] = self.resolved_at.isoformat() if self.resolved_at else None
        data["status"] = self.status.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Signal:
        data = dict(data)
        data["evidence"] = [Evidence.from_dict(e) for e in data.get("evidence", [])]
        data["issued_at"] = datetime.fromisoformat(data["issued_at"])
        resolved_at = data.get("resolved_at")
        data["resolved_at"] = datetime.fromisoformat(resolved_at) if resolved_at else None
        data["status"] = SignalStatus(data.get("status", SignalStatus.OPEN.value))
        return cls(**data)
