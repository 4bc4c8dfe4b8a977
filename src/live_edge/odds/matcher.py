"""Match a scoreboard game to a sportsbook quote despite naming drift.

Scoreboards and books disagree on team names ("Saint Mary's Gaels" vs "Saint
Mary's", "St. John's Red Storm" vs "St. John's (NY) Red Storm"). Matching
runs an ordered list of strategies; the first that finds a quote wins.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from live_edge.odds.models import OddsQuote


@dataclass(frozen=True)
class MatchupQuery:
    away_abbr: str
    home_abbr: str
    away_full: str
    home_full: str


MatchStrategy = Callable[[MatchupQuery, Iterable[OddsQuote]], OddsQuote | None]


def _norm(name: str) -> str:
    return " ".join(name.lower().split())


def match_exact(query: MatchupQuery, quotes: Iterable[OddsQuote]) -> OddsQuote | None:
    """Case-insensitive full-name equality on both sides."""
    away, home = _norm(query.away_full), _norm(query.home_full)
    if not away or not home:
        return None
    for quote in quotes:
        if _norm(quote.away) == away and _norm(quote.home) == home:
            return quote
    return None


def _contains_either(a: str, b: str) -> bool:
    return bool(a and b) and (a in b or b in a)


def match_substring(query: MatchupQuery, quotes: Iterable[OddsQuote]) -> OddsQuote | None:
    """One name contains the other, on both sides."""
    away, home = _norm(query.away_full), _norm(query.home_full)
    for quote in quotes:
        if _contains_either(away, _norm(quote.away)) and _contains_either(home, _norm(quote.home)):
            return quote
    return None


def _same_team(full: str, abbr: str, candidate: str) -> bool:
    words = _norm(full).split()
    cand_words = _norm(candidate).split()
    if not cand_words:
        return False
    # First and last word must both agree; a shared prefix alone is not enough
    if words and words[0] == cand_words[0] and words[-1] == cand_words[-1]:
        return True
    return bool(abbr) and abbr.lower() in cand_words


def match_words(query: MatchupQuery, quotes: Iterable[OddsQuote]) -> OddsQuote | None:
    """First-and-last word agreement, or abbreviation as a word, on both sides."""
    for quote in quotes:
        if _same_team(query.away_full, query.away_abbr, quote.away) and _same_team(
            query.home_full, query.home_abbr, quote.home
        ):
            return quote
    return None


STRATEGIES: tuple[MatchStrategy, ...] = (match_exact, match_substring, match_words)


def match_quote(
    query: MatchupQuery,
    quotes: Iterable[OddsQuote],
    strategies: tuple[MatchStrategy, ...] = STRATEGIES,
) -> OddsQuote | None:
    """Return the first quote any strategy accepts, trying strategies in order."""
    candidates = list(quotes)
    if not candidates:
        return None
    for strategy in strategies:
        found = strategy(query, candidates)
        if found is not None:
            return found
    return None
