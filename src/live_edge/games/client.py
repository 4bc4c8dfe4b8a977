"""ESPN scoreboard client (read-only).

Turns the site API scoreboard payload into ``GameSnapshot`` values for live
events and ``FinalScore`` values for completed ones.
"""

from __future__ import annotations

import logging

from live_edge.common.http import HttpClient
from live_edge.common.types import as_dict, dict_items, to_float, to_int
from live_edge.config import get_settings
from live_edge.games.models import (
    FinalScore,
    GameSnapshot,
    ScoreboardUpdate,
    ScoringLeader,
    ShootingLine,
    TeamState,
)
from live_edge.leagues import LeagueConfig

logger = logging.getLogger(__name__)


async def fetch_scoreboard(league: LeagueConfig) -> ScoreboardUpdate:
    """Fetch the league's current scoreboard and split live from completed games.

    Raises httpx.HTTPError on transport failures and ValueError on a
    malformed body; the caller abandons the poll in either case.
    """
    settings = get_settings()
    async with HttpClient(base_url=settings.scoreboard_api_url) as client:
        data = await client.get_json(f"/{league.scoreboard_path}/scoreboard")
    if not isinstance(data, dict):
        raise ValueError(f"{league.name} scoreboard payload is not an object")
    return parse_scoreboard(data)


def parse_scoreboard(data: dict) -> ScoreboardUpdate:
    """Parse a raw scoreboard payload. Malformed events are skipped."""
    update = ScoreboardUpdate()
    for event in dict_items(data.get("events")):
        state = as_dict(as_dict(event.get("status")).get("type")).get("state")
        if state == "in":
            snapshot = parse_live_event(event)
            if snapshot is not None:
                update.live.append(snapshot)
        elif state == "post":
            final = parse_final_event(event)
            if final is not None:
                update.completed.append(final)
    return update


def _competitors(event: dict) -> tuple[dict, dict] | None:
    competitions = dict_items(event.get("competitions"))
    if not competitions:
        return None
    competitors = dict_items(competitions[0].get("competitors"))
    away = next((c for c in competitors if c.get("homeAway") == "away"), None)
    home = next((c for c in competitors if c.get("homeAway") == "home"), None)
    if away is None or home is None:
        return None
    return away, home


def _parse_shooting(competitor: dict) -> ShootingLine:
    stats = {
        s.get("name"): s.get("displayValue")
        for s in dict_items(competitor.get("statistics"))
        if isinstance(s.get("name"), str)
    }
    return ShootingLine(
        fg_made=to_int(stats.get("fieldGoalsMade")),
        fg_attempted=to_int(stats.get("fieldGoalsAttempted")),
        three_made=to_int(stats.get("threePointFieldGoalsMade")),
        three_attempted=to_int(stats.get("threePointFieldGoalsAttempted")),
        three_pct=to_float(
            stats.get("threePointFieldGoalPct") or stats.get("threePointPct")
        ),
        ft_made=to_int(stats.get("freeThrowsMade")),
        ft_attempted=to_int(stats.get("freeThrowsAttempted")),
    )


def _parse_leaders(competitor: dict, team_abbr: str) -> list[ScoringLeader]:
    leaders: list[ScoringLeader] = []
    for category in dict_items(competitor.get("leaders")):
        if category.get("name") != "points" and category.get("displayName") != "Points":
            continue
        for entry in dict_items(category.get("leaders")):
            athlete = as_dict(entry.get("athlete"))
            leaders.append(ScoringLeader(
                name=str(athlete.get("shortName") or athlete.get("displayName") or "?"),
                points=to_float(entry.get("value")),
                team=team_abbr,
            ))
    return leaders


def _parse_team(competitor: dict) -> TeamState:
    team = as_dict(competitor.get("team"))
    abbr = str(team.get("abbreviation") or "")
    return TeamState(
        abbr=abbr,
        name=str(team.get("displayName") or ""),
        score=to_int(competitor.get("score")),
        shooting=_parse_shooting(competitor),
        leaders=_parse_leaders(competitor, abbr),
    )


def parse_live_event(event: dict) -> GameSnapshot | None:
    """Build a snapshot from one in-progress event, or None if malformed."""
    pair = _competitors(event)
    if pair is None or not event.get("id"):
        logger.debug("Skipping malformed live event %s", event.get("id"))
        return None
    away, home = pair
    status = as_dict(event.get("status"))
    return GameSnapshot(
        event_id=str(event["id"]),
        away=_parse_team(away),
        home=_parse_team(home),
        period=to_int(status.get("period")),
        clock=str(status.get("displayClock") or ""),
    )


def parse_final_event(event: dict) -> FinalScore | None:
    """Build a final score from one completed event, or None if malformed."""
    pair = _competitors(event)
    if pair is None or not event.get("id"):
        logger.debug("Skipping malformed final event %s", event.get("id"))
        return None
    away, home = pair
    return FinalScore(
        event_id=str(event["id"]),
        away_abbr=str(as_dict(away.get("team")).get("abbreviation") or ""),
        home_abbr=str(as_dict(home.get("team")).get("abbreviation") or ""),
        away_score=to_int(away.get("score")),
        home_score=to_int(home.get("score")),
    )
