"""Read-only lookup of tracked scorers and their season scoring rates.

The table is produced by a separate enrichment job and written to JSON as
either ``{"nba": [...], "ncaab": [...]}`` or a bare list (NCAAB only). Each
entry is ``{"name": ..., "team": ..., "ppg": ...}``. NBA falls back to a
built-in list when the file has no NBA entries.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from live_edge.common.types import to_float
from live_edge.leagues import LeagueConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StarPlayer:
    name: str
    team: str
    ppg: float

    @property
    def surname(self) -> str:
        return _surname(self.name)


def _surname(name: str) -> str:
    parts = name.strip().lower().split()
    return parts[-1] if parts else ""


NBA_DEFAULT_STARS: tuple[StarPlayer, ...] = (
    StarPlayer("Luka Doncic", "LAL", 32.5),
    StarPlayer("Shai Gilgeous-Alexander", "OKC", 31.8),
    StarPlayer("Anthony Edwards", "MIN", 29.6),
    StarPlayer("Jaylen Brown", "BOS", 29.2),
    StarPlayer("Tyrese Maxey", "PHI", 29.1),
    StarPlayer("Nikola Jokic", "DEN", 28.8),
    StarPlayer("Donovan Mitchell", "CLE", 28.5),
    StarPlayer("Kawhi Leonard", "LAC", 28.0),
    StarPlayer("Lauri Markkanen", "UTA", 26.7),
    StarPlayer("Jalen Brunson", "NYK", 26.7),
    StarPlayer("Kevin Durant", "HOU", 25.9),
    StarPlayer("Jamal Murray", "DEN", 25.5),
    StarPlayer("Cade Cunningham", "DET", 25.3),
    StarPlayer("Devin Booker", "PHX", 24.7),
    StarPlayer("Michael Porter Jr.", "BKN", 24.6),
    StarPlayer("James Harden", "LAC", 24.5),
    StarPlayer("Deni Avdija", "POR", 24.4),
    StarPlayer("Victor Wembanyama", "SAS", 24.2),
    StarPlayer("Pascal Siakam", "IND", 23.9),
    StarPlayer("Keyonte George", "UTA", 23.8),
    StarPlayer("Jalen Johnson", "ATL", 23.0),
    StarPlayer("Norman Powell", "MIA", 22.9),
    StarPlayer("Trey Murphy III", "NOP", 21.9),
    StarPlayer("Julius Randle", "MIN", 21.9),
    StarPlayer("Zion Williamson", "NOP", 21.8),
)


class StarTable:
    """Stars per league, matched by surname plus team abbreviation."""

    def __init__(self, stars: dict[str, list[StarPlayer]] | None = None) -> None:
        self._stars = stars or {}

    def stars(self, league: LeagueConfig) -> list[StarPlayer]:
        return [s for s in self._stars.get(league.mode, []) if s.ppg >= league.star_ppg_min]

    def match(self, league: LeagueConfig, leader_name: str, team: str) -> StarPlayer | None:
        """Find the tracked star for a box-score leader, or None.

        Feeds abbreviate first names ("L. Doncic"), so only the surname and
        team have to agree.
        """
        surname = _surname(leader_name)
        if not surname:
            return None
        for star in self.stars(league):
            if star.surname == surname and star.team == team:
                return star
        return None

    def __len__(self) -> int:
        return sum(len(v) for v in self._stars.values())


def _parse_entries(raw: object) -> list[StarPlayer]:
    stars: list[StarPlayer] = []
    if not isinstance(raw, list):
        return stars
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        name = str(entry.get("name") or "").strip()
        team = str(entry.get("team") or "").strip()
        ppg = to_float(entry.get("ppg"))
        if name and team and ppg > 0:
            stars.append(StarPlayer(name=name, team=team, ppg=ppg))
    return stars


def load_star_table(path: Path | None) -> StarTable:
    """Load the star table, tolerating a missing, empty or partial file."""
    by_league: dict[str, list[StarPlayer]] = {}
    if path is not None and path.exists():
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read star table %s: %s", path, exc)
            raw = {}
        if isinstance(raw, list):
            by_league["ncaab"] = _parse_entries(raw)
        elif isinstance(raw, dict):
            for mode, entries in raw.items():
                by_league[str(mode).lower()] = _parse_entries(entries)

    if not by_league.get("nba"):
        by_league["nba"] = list(NBA_DEFAULT_STARS)
    by_league.setdefault("ncaab", [])

    logger.info(
        "Star table: %d NBA, %d NCAAB",
        len(by_league["nba"]), len(by_league["ncaab"]),
    )
    return StarTable(by_league)
