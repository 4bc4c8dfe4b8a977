"""Signal lifecycle: issue, line-movement capture and resolution.

The log is append-only. A signal is OPEN from issuance until its game is
final, then RESOLVED for good; line-movement captures are one-shot
annotations on OPEN signals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from live_edge.analysis.urgency import Urgency
from live_edge.games.models import FinalScore, GameSnapshot
from live_edge.leagues import LeagueConfig
from live_edge.odds.models import OddsBook, OddsQuote
from live_edge.signals.models import Pick, Signal, SignalStatus
from live_edge.signals.recommendation import Recommendation
from live_edge.signals.staking import StakeSizing, settle_payout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineWindow:
    """Quotes sampled ``lo``..``hi`` minutes after issue count for one horizon."""

    attr: str
    horizon: float
    lo: float
    hi: float


LINE_WINDOWS: tuple[LineWindow, ...] = (
    LineWindow("lec_5", horizon=5, lo=4, hi=7),
    LineWindow("lec_10", horizon=10, lo=9, hi=12),
)


def signal_key(event_id: str, bet_team: str, league: str, issued_at: datetime) -> str:
    """Dedup key: one signal per event, side, league and UTC hour."""
    hour = issued_at.astimezone(timezone.utc).strftime("%Y-%m-%dT%H")
    return f"{event_id}_{bet_team}_{league}_{hour}"


class SignalLog:
    """In-memory append-only signal log."""

    def __init__(self, signals: list[Signal] | None = None) -> None:
        self._signals: list[Signal] = list(signals or [])
        self._by_key: dict[str, Signal] = {s.key: s for s in self._signals}

    def __len__(self) -> int:
        return len(self._signals)

    def __iter__(self):
        return iter(self._signals)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def get(self, key: str) -> Signal | None:
        return self._by_key.get(key)

    def open_signals(self, league: str | None = None) -> list[Signal]:
        return [
            s for s in self._signals
            if s.is_open and (league is None or s.league == league)
        ]

    def issue(
        self,
        league: LeagueConfig,
        snapshot: GameSnapshot,
        pick: Pick,
        urgency: Urgency,
        rec: Recommendation,
        price: int,
        quote: OddsQuote | None,
        implied_prob: float,
        sizing: StakeSizing,
        now: datetime | None = None,
    ) -> Signal | None:
        """Append a new OPEN signal, or return None if its key already exists."""
        issued_at = now or datetime.now(timezone.utc)
        key = signal_key(snapshot.event_id, pick.bet_team, league.mode, issued_at)
        if key in self._by_key:
            logger.debug("Duplicate signal %s skipped", key)
            return None

        bet = snapshot.team(pick.bet_side)
        fade = snapshot.opponent(pick.bet_side)
        signal = Signal(
            key=key,
            event_id=snapshot.event_id,
            league=league.mode,
            game=snapshot.label,
            away_team=snapshot.away.abbr,
            home_team=snapshot.home.abbr,
            away_full=snapshot.away.name,
            home_full=snapshot.home.name,
            away_score=snapshot.away.score,
            home_score=snapshot.home.score,
            period=snapshot.period,
            clock=snapshot.clock,
            period_label=league.period_label(snapshot.period),
            bet_side=pick.bet_side,
            bet_team=bet.abbr,
            bet_team_full=bet.name,
            fade_team=fade.abbr,
            fade_team_full=fade.name,
            signal_types=[t.value for t in pick.signal_types],
            evidence=list(pick.evidence),
            signal_count=pick.signal_count,
            is_combined=pick.is_combined,
            urgency=urgency.tier.value,
            home_court_edge=pick.home_court_edge,
            rec_type=rec.bet_type,
            rec_margin=rec.margin,
            rec_minutes_remaining=rec.minutes_remaining,
            market_price=price,
            has_live_odds=quote is not None,
            quote_key=quote.key if quote is not None else None,
            implied_prob=round(implied_prob * 100, 1),
            kelly_pct=round(sizing.fraction * 100, 2),
            kelly_stake=sizing.stake,
            est_win_prob=round(sizing.win_prob * 100, 1),
            est_edge=round(sizing.edge * 100, 1),
            issued_at=issued_at,
        )
        self._signals.append(signal)
        self._by_key[key] = signal
        return signal

    def capture_line_movement(self, book: OddsBook, league: str, now: datetime | None = None) -> int:
        """Record 5- and 10-minute price drift for OPEN signals with a quote.

        Each horizon is captured at most once, from the quote sampled inside
        its window that lies closest to the horizon. Returns the number of
        captures made.
        """
        now = now or datetime.now(timezone.utc)
        captured = 0
        for signal in self.open_signals(league):
            if signal.quote_key is None:
                continue
            history = book.history_for(signal.quote_key)
            if not history:
                continue
            issued_ts = signal.issued_at.timestamp()
            elapsed_min = (now - signal.issued_at) / timedelta(minutes=1)
            for window in LINE_WINDOWS:
                if getattr(signal, window.attr) is not None or elapsed_min < window.horizon:
                    continue
                in_window = [
                    q for q in history
                    if window.lo <= (q.observed_at - issued_ts) / 60 <= window.hi
                ]
                if not in_window:
                    continue
                later = min(
                    in_window,
                    key=lambda q: abs((q.observed_at - issued_ts) / 60 - window.horizon),
                )
                setattr(signal, window.attr, signal.market_price - later.price(signal.bet_side))
                captured += 1
        return captured

    def resolve(
        self, completed: list[FinalScore], league: str | None = None, now: datetime | None = None,
    ) -> list[Signal]:
        """Settle OPEN signals whose games are final. Idempotent.

        Returns the signals resolved by this call.
        """
        finals = {f.event_id: f for f in completed}
        resolved_at = now or datetime.now(timezone.utc)
        resolved: list[Signal] = []
        for signal in self.open_signals(league):
            final = finals.get(signal.event_id)
            if final is None:
                continue
            bet_score, opp_score = (
                (final.away_score, final.home_score)
                if signal.bet_side == "away"
                else (final.home_score, final.away_score)
            )
            won = bet_score > opp_score
            signal.final_away_score = final.away_score
            signal.final_home_score = final.home_score
            signal.result = "WIN" if won else "LOSS"
            signal.pnl = round(settle_payout(signal.kelly_stake, signal.market_price, won), 2)
            signal.resolved_at = resolved_at
            signal.status = SignalStatus.RESOLVED
            resolved.append(signal)
        return resolved

    def to_list(self) -> list[Signal]:
        return list(self._signals)
