"""SQLite persistence for the signal log and per-league engine state."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import aiosqlite

from live_edge.config import get_settings
from live_edge.signals.models import Signal, SignalStatus

_CREATE_SIGNALS = """
CREATE TABLE IF NOT EXISTS signals (
    key TEXT PRIMARY KEY,
    league TEXT NOT NULL,
    event_id TEXT NOT NULL,
    status TEXT NOT NULL,
    issued_at TEXT NOT NULL,
    data TEXT NOT NULL
);
"""

_CREATE_INDEX = """
CREATE INDEX IF NOT EXISTS idx_signals_league_status ON signals(league, status);
"""

_CREATE_STATE = """
CREATE TABLE IF NOT EXISTS engine_state (
    key TEXT PRIMARY KEY,
    data TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


class SignalTracker:
    """Load/save the append-only signal log and the engine's league state."""

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path or get_settings().db_path

    async def _ensure_db(self) -> None:
        """Create database and tables if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute(_CREATE_SIGNALS)
            await db.execute(_CREATE_INDEX)
            await db.execute(_CREATE_STATE)
            await db.commit()

    async def save_signals(self, signals: list[Signal]) -> int:
        """Upsert signals by key. Returns the number of rows written."""
        await self._ensure_db()
        rows = [
            (
                s.key,
                s.league,
                s.event_id,
                s.status.value,
                s.issued_at.isoformat(),
                json.dumps(s.to_dict()),
            )
            for s in signals
        ]
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.executemany(
                """INSERT INTO signals (key, league, event_id, status, issued_at, data)
                   VALUES (?, ?, ?, ?, ?, ?)
                   ON CONFLICT (key) DO UPDATE
                   SET status = excluded.status, data = excluded.data""",
                rows,
            )
            await db.commit()
        return len(rows)

    async def load_signals(self) -> list[Signal]:
        """Load the whole log in issue order."""
        return await self.get_signals()

    async def get_signals(
        self, league: str | None = None, status: SignalStatus | None = None,
    ) -> list[Signal]:
        await self._ensure_db()
        query = "SELECT data FROM signals"
        clauses: list[str] = []
        params: list[str] = []
        if league:
            clauses.append("league = ?")
            params.append(league)
        if status is not None:
            clauses.append("status = ?")
            params.append(status.value)
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY issued_at, key"

        async with aiosqlite.connect(str(self._db_path)) as db:
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
        return [Signal.from_dict(json.loads(row[0])) for row in rows]

    async def save_state(self, key: str, data: dict) -> None:
        """Upsert one state blob (key -> JSON)."""
        now = datetime.now(timezone.utc).isoformat()
        await self._ensure_db()
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute(
                """INSERT INTO engine_state (key, data, updated_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT (key) DO UPDATE
                   SET data = excluded.data, updated_at = excluded.updated_at""",
                (key, json.dumps(data), now),
            )
            await db.commit()

    async def load_state(self, key: str) -> dict | None:
        """Read one state blob. Returns None if not found."""
        await self._ensure_db()
        async with aiosqlite.connect(str(self._db_path)) as db:
            cursor = await db.execute(
                "SELECT data FROM engine_state WHERE key = ?", (key,),
            )
            row = await cursor.fetchone()
        return json.loads(row[0]) if row else None

    async def get_performance_summary(self, league: str | None = None) -> dict:
        """Aggregate record, P&L and line movement over the log."""
        signals = await self.get_signals(league=league)
        resolved = [s for s in signals if s.status is SignalStatus.RESOLVED]
        wins = sum(1 for s in resolved if s.result == "WIN")
        staked = sum(s.kelly_stake for s in resolved)
        pnl = sum(s.pnl or 0.0 for s in resolved)
        lec_5 = [s.lec_5 for s in signals if s.lec_5 is not None]
        lec_10 = [s.lec_10 for s in signals if s.lec_10 is not None]
        return {
            "total_signals": len(signals),
            "open": len(signals) - len(resolved),
            "resolved": len(resolved),
            "wins": wins,
            "win_rate": wins / len(resolved) if resolved else None,
            "total_pnl": pnl,
            "roi": pnl / staked if staked > 0 else None,
            "avg_lec_5": sum(lec_5) / len(lec_5) if lec_5 else None,
            "avg_lec_10": sum(lec_10) / len(lec_10) if lec_10 else None,
        }
