"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from live_edge.games.models import GameSnapshot, ScoringLeader, ShootingLine, TeamState
from live_edge.signals.models import Evidence, Signal, SignalType


def _make_team(
    abbr: str,
    score: int,
    name: str | None = None,
    three_made: int = 0,
    three_attempted: int = 0,
    three_pct: float = 0.0,
    leaders: list[tuple[str, float]] | None = None,
) -> TeamState:
    return TeamState(
        abbr=abbr,
        name=name or f"{abbr} Team",
        score=score,
        shooting=ShootingLine(
            three_made=three_made,
            three_attempted=three_attempted,
            three_pct=three_pct,
        ),
        leaders=[ScoringLeader(name=n, points=p, team=abbr) for n, p in (leaders or [])],
    )


def _make_snapshot(
    away: TeamState,
    home: TeamState,
    period: int = 3,
    clock: str = "6:00",
    event_id: str = "401",
) -> GameSnapshot:
    return GameSnapshot(event_id=event_id, away=away, home=home, period=period, clock=clock)


def _make_signal(**overrides) -> Signal:
    fields = dict(
        key="401_LAL_nba_2026-01-15T01",
        event_id="401",
        league="nba",
        game="LAL @ BOS",
        away_team="LAL",
        home_team="BOS",
        away_full="Los Angeles Lakers",
        home_full="Boston Celtics",
        away_score=60,
        home_score=70,
        period=3,
        clock="6:00",
        period_label="Q3",
        bet_side="away",
        bet_team="LAL",
        bet_team_full="Los Angeles Lakers",
        fade_team="BOS",
        fade_team_full="Boston Celtics",
        signal_types=["3pt_fragile"],
        evidence=[Evidence(SignalType.THREE_PT_FRAGILE, "BOS", "BOS 3PT FRAGILE: 60% on 20 att")],
        signal_count=1,
        is_combined=False,
        urgency="ACT_NOW",
        home_court_edge=False,
        rec_type="SPREAD",
        rec_margin=10,
        rec_minutes_remaining=18,
        market_price=-110,
        has_live_odds=False,
        quote_key=None,
        implied_prob=52.4,
        kelly_pct=3.12,
        kelly_stake=625.0,
        est_win_prob=55.9,
        est_edge=3.5,
        issued_at=datetime(2026, 1, 15, 1, 30, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Signal(**fields)


@pytest.fixture
def now():
    return datetime(2026, 1, 15, 1, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_team():
    return _make_team


@pytest.fixture
def make_snapshot():
    return _make_snapshot


@pytest.fixture
def make_signal():
    return _make_signal


@pytest.fixture
def fragile_snapshot():
    """BOS up 10 in Q3 on 12-of-20 from deep; LAL still scoring inside."""
    return _make_snapshot(
        away=_make_team("LAL", 60, name="Los Angeles Lakers", three_made=4),
        home=_make_team(
            "BOS", 70, name="Boston Celtics",
            three_made=12, three_attempted=20, three_pct=60.0,
        ),
    )


@pytest.fixture
def scoreboard_payload():
    """Trimmed ESPN scoreboard: one live, one final, one scheduled event."""
    return {
        "events": [
            {
                "id": "401",
                "status": {"period": 3, "displayClock": "6:00", "type": {"state": "in"}},
                "competitions": [{
                    "competitors": [
                        {
                            "homeAway": "home",
                            "score": "70",
                            "team": {"abbreviation": "BOS", "displayName": "Boston Celtics"},
                            "statistics": [
                                {"name": "fieldGoalsMade", "displayValue": "26"},
                                {"name": "threePointFieldGoalsMade", "displayValue": "12"},
                                {"name": "threePointFieldGoalsAttempted", "displayValue": "20"},
                                {"name": "threePointFieldGoalPct", "displayValue": "60.0"},
                            ],
                            "leaders": [{
                                "name": "points",
                                "leaders": [{
                                    "value": 22.0,
                                    "athlete": {"shortName": "J. Tatum"},
                                }],
                            }],
                        },
                        {
                            "homeAway": "away",
                            "score": "60",
                            "team": {"abbreviation": "LAL", "displayName": "Los Angeles Lakers"},
                            "statistics": [
                                {"name": "threePointFieldGoalsMade", "displayValue": "4"},
                            ],
                            "leaders": [{
                                "name": "points",
                                "leaders": [{
                                    "value": 8.0,
                                    "athlete": {"shortName": "L. Doncic"},
                                }],
                            }],
                        },
                    ],
                }],
            },
            {
                "id": "402",
                "status": {"period": 4, "displayClock": "0.0", "type": {"state": "post"}},
                "competitions": [{
                    "competitors": [
                        {"homeAway": "home", "score": "101", "team": {"abbreviation": "NYK"}},
                        {"homeAway": "away", "score": "99", "team": {"abbreviation": "MIA"}},
                    ],
                }],
            },
            {
                "id": "403",
                "status": {"period": 0, "displayClock": "0:00", "type": {"state": "pre"}},
                "competitions": [{"competitors": []}],
            },
        ],
    }
