"""Rolling score history and the damage-lock detector."""

from __future__ import annotations

import time
from dataclasses import dataclass

from live_edge.common.types import Side

MIN_SAMPLE_SPACING_SECONDS = 25.0
MAX_HISTORY = 15
MIN_LOCK_SAMPLES = 4
MIN_LOCK_ELAPSED_MINUTES = 15.0
MIN_LOCK_SPAN_SECONDS = 180.0
MAX_STEP_RECOVERY = 3


@dataclass
class ScoreSample:
    ts: float  # unix seconds
    away: int
    home: int

    @property
    def total(self) -> int:
        return self.away + self.home

    def deficit(self, side: Side) -> int:
        """Points ``side`` trails by (negative when leading)."""
        return self.home - self.away if side == "away" else self.away - self.home


@dataclass
class DamageLock:
    locked: bool
    deficit_now: int | None = None
    deficit_then: int | None = None


class MomentumTracker:
    """Per-event score history, sampled at least 25s apart and capped at 15.

    Histories are never deleted; stale events simply stop receiving samples.
    """

    def __init__(self, history: dict[str, list[ScoreSample]] | None = None) -> None:
        self._history: dict[str, list[ScoreSample]] = history or {}

    def history(self, event_id: str) -> list[ScoreSample]:
        return list(self._history.get(event_id, []))

    def record(
        self, event_id: str, away_score: int, home_score: int, now: float | None = None,
    ) -> bool:
        """Append a sample unless the latest one is under 25s old.

        Returns True if a sample was added.
        """
        ts = time.time() if now is None else now
        hist = self._history.setdefault(event_id, [])
        added = False
        if not hist or ts - hist[-1].ts >= MIN_SAMPLE_SPACING_SECONDS:
            hist.append(ScoreSample(ts=ts, away=away_score, home=home_score))
            added = True
        if len(hist) > MAX_HISTORY:
            del hist[: len(hist) - MAX_HISTORY]
        return added

    def damage_lock(self, event_id: str, side: Side, elapsed: float) -> DamageLock:
        """Decide whether ``side``'s deficit has stopped shrinking.

        Needs enough samples, enough game time, a sampled span of at least
        three minutes and a feed that actually moved. Favors precision:
        any single step where the deficit shrank by more than 3 points
        breaks the lock.
        """
        hist = self._history.get(event_id) or []
        if len(hist) < MIN_LOCK_SAMPLES or elapsed < MIN_LOCK_ELAPSED_MINUTES:
            return DamageLock(locked=False)

        first, last = hist[0], hist[-1]
        if last.ts - first.ts < MIN_LOCK_SPAN_SECONDS:
            return DamageLock(locked=False)
        if last.total == first.total:
            return DamageLock(locked=False)

        deficit_now = last.deficit(side)
        deficit_then = first.deficit(side)
        trailing = deficit_now > 0
        stable = deficit_now - deficit_then >= 0
        steady = all(
            prev.deficit(side) - cur.deficit(side) <= MAX_STEP_RECOVERY
            for prev, cur in zip(hist, hist[1:])
        )
        return DamageLock(
            locked=trailing and stable and steady,
            deficit_now=deficit_now,
            deficit_then=deficit_then,
        )

    def to_dict(self) -> dict[str, list[dict]]:
        return {
            event_id: [{"ts": s.ts, "away": s.away, "home": s.home} for s in samples]
            for event_id, samples in self._history.items()
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> MomentumTracker:
        history: dict[str, list[ScoreSample]] = {}
        for event_id, samples in (data or {}).items():
            history[str(event_id)] = [
                ScoreSample(ts=float(s["ts"]), away=int(s["away"]), home=int(s["home"]))
                for s in samples
            ][-MAX_HISTORY:]
        return cls(history)
