"""Live polling engine.

Wires together, per league and per poll: odds refresh → scoreboard fetch →
momentum update → aggregation → pricing and sizing → signal log → resolution
→ persistence. Leagues are polled on one asyncio loop, each on its own
cadence, staggered so their polls do not line up. Analysis inside a poll is
synchronous; the only awaits are HTTP and SQLite calls.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

import aiosqlite
import httpx
from rich.console import Console

from live_edge.analysis.clock import elapsed_fraction, elapsed_minutes
from live_edge.analysis.momentum import MomentumTracker
from live_edge.analysis.urgency import classify_urgency
from live_edge.config import get_settings
from live_edge.games.client import fetch_scoreboard
from live_edge.games.models import GameSnapshot
from live_edge.leagues import LeagueConfig
from live_edge.notifications.telegram import TelegramNotifier
from live_edge.odds.client import refresh_odds
from live_edge.odds.matcher import MatchupQuery, match_quote
from live_edge.odds.models import OddsBook
from live_edge.roster.stars import StarTable, load_star_table
from live_edge.signals.aggregator import aggregate
from live_edge.signals.formatters import format_resolution_line, format_signal_line
from live_edge.signals.lifecycle import SignalLog
from live_edge.signals.models import Signal
from live_edge.signals.recommendation import recommend
from live_edge.signals.staking import implied_probability, kelly_stake
from live_edge.signals.tracker import SignalTracker

logger = logging.getLogger(__name__)
console = Console()

# Upstream problems that abandon one league's poll without stopping the engine
POLL_ERRORS = (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError)


@dataclass
class LeagueState:
    """Mutable per-league state: score history and odds cache."""

    momentum: MomentumTracker = field(default_factory=MomentumTracker)
    odds: OddsBook = field(default_factory=OddsBook)

    def to_dict(self) -> dict:
        return {"score_history": self.momentum.to_dict(), "odds": self.odds.to_dict()}

    @classmethod
    def from_dict(cls, data: dict | None) -> LeagueState:
        data = data or {}
        return cls(
            momentum=MomentumTracker.from_dict(data.get("score_history")),
            odds=OddsBook.from_dict(data.get("odds")),
        )


@dataclass
class EngineContext:
    """Everything the analyzers read or mutate, owned by the engine."""

    stars: StarTable = field(default_factory=StarTable)
    signals: SignalLog = field(default_factory=SignalLog)
    leagues: dict[str, LeagueState] = field(default_factory=dict)

    def state(self, league: LeagueConfig) -> LeagueState:
        return self.leagues.setdefault(league.mode, LeagueState())


@dataclass
class PollResult:
    issued: list[Signal] = field(default_factory=list)
    resolved: list[Signal] = field(default_factory=list)
    live_games: int = 0
    failed: bool = False


def evaluate_game(
    ctx: EngineContext,
    league: LeagueConfig,
    snapshot: GameSnapshot,
    now: datetime,
) -> Signal | None:
    """Analyze one live game and issue a signal if the evidence supports one."""
    settings = get_settings()
    state = ctx.state(league)

    elapsed = elapsed_minutes(league, snapshot.period, snapshot.clock)
    pick = aggregate(league, snapshot, ctx.stars, state.momentum, elapsed)
    if pick is None:
        return None

    query = MatchupQuery(
        away_abbr=snapshot.away.abbr,
        home_abbr=snapshot.home.abbr,
        away_full=snapshot.away.name,
        home_full=snapshot.home.name,
    )
    quote = match_quote(query, state.odds.quotes.values())
    price = quote.price(pick.bet_side) if quote is not None else settings.default_price
    implied = implied_probability(price)

    urgency = classify_urgency(elapsed_fraction(league, snapshot.period, snapshot.clock))
    sizing = kelly_stake(
        implied, price, pick.signal_count, urgency.multiplier, bankroll=settings.bankroll,
    )
    rec = recommend(
        league, snapshot.away.score, snapshot.home.score, snapshot.period, snapshot.clock,
    )
    return ctx.signals.issue(
        league, snapshot, pick, urgency, rec, price, quote, implied, sizing, now=now,
    )


class LiveEngine:
    """Polls each league on a fixed cadence and keeps the signal log current."""

    def __init__(
        self,
        leagues: list[LeagueConfig],
        tracker: SignalTracker | None = None,
        notifier: TelegramNotifier | None = None,
        context: EngineContext | None = None,
    ) -> None:
        self.leagues = leagues
        self.tracker = tracker or SignalTracker()
        self.notifier = notifier
        self.context = context or EngineContext()

    async def load(self) -> None:
        """Restore the signal log, league state and star table."""
        settings = get_settings()
        self.context.signals = SignalLog(await self.tracker.load_signals())
        for league in self.leagues:
            data = await self.tracker.load_state(f"league:{league.mode}")
            self.context.leagues[league.mode] = LeagueState.from_dict(data)
        self.context.stars = load_star_table(settings.stars_path)
        logger.info("Loaded %d existing signal(s)", len(self.context.signals))

    async def save(self, league: LeagueConfig) -> None:
        state = self.context.state(league)
        await self.tracker.save_state(f"league:{league.mode}", state.to_dict())
        await self.tracker.save_signals(
            [s for s in self.context.signals if s.league == league.mode]
        )

    async def poll_league(self, league: LeagueConfig, now: datetime | None = None) -> PollResult:
        """One poll of one league. Upstream failures abandon the poll."""
        now = now or datetime.now(timezone.utc)
        state = self.context.state(league)
        result = PollResult()
        changed = False

        if await refresh_odds(league, state.odds, now.timestamp()):
            changed = True
            captured = self.context.signals.capture_line_movement(state.odds, league.mode, now)
            if captured:
                logger.info("[%s] Captured %d line-movement value(s)", league.name, captured)

        try:
            update = await fetch_scoreboard(league)
        except POLL_ERRORS as exc:
            logger.warning("[%s] Scoreboard poll failed: %s", league.name, exc)
            console.print(f"  [yellow]{league.name} scoreboard unavailable: {exc}[/yellow]")
            result.failed = True
            if changed:
                await self.save(league)
            return result

        result.live_games = len(update.live)
        if update.live:
            console.print(f"[bold]{league.name}[/bold]: {len(update.live)} live game(s), scanning...")
        else:
            console.print(f"[dim]{league.name}: no live games[/dim]")

        for snapshot in update.live:
            if state.momentum.record(
                snapshot.event_id, snapshot.away.score, snapshot.home.score, now.timestamp(),
            ):
                changed = True
            signal = evaluate_game(self.context, league, snapshot, now)
            if signal is not None:
                result.issued.append(signal)
                logger.info(format_signal_line(signal))

        result.resolved = self.context.signals.resolve(update.completed, league.mode, now)
        for signal in result.resolved:
            logger.info(format_resolution_line(signal))

        if result.issued or result.resolved:
            changed = True
            console.print(
                f"  {league.name}: [green]{len(result.issued)}[/green] new, "
                f"{len(result.resolved)} resolved, {len(self.context.signals)} total"
            )
        if changed:
            await self.save(league)

        if self.notifier is not None:
            await self.notifier.notify(league.mode, result.issued)
            await self.notifier.notify_resolved(result.resolved)
        return result

    async def _safe_poll(self, league: LeagueConfig) -> None:
        """Poll one league, logging any failure except a storage error."""
        try:
            await self.poll_league(league)
        except aiosqlite.Error:
            raise
        except Exception:
            logger.exception("[%s] Poll failed", league.name)

    async def _league_loop(self, league: LeagueConfig, delay: float, interval: float) -> None:
        await asyncio.sleep(delay)
        while True:
            await self._safe_poll(league)
            await asyncio.sleep(interval)

    async def run(self, once: bool = False) -> None:
        """Load state, poll every league once, then keep polling until cancelled."""
        settings = get_settings()
        await self.load()

        for league in self.leagues:
            await self._safe_poll(league)
        if once:
            return

        interval = settings.refresh_interval
        offset = interval / len(self.leagues)
        tasks = [
            asyncio.create_task(self._league_loop(league, interval + i * offset, interval))
            for i, league in enumerate(self.leagues)
        ]
        await asyncio.gather(*tasks)
