"""The Odds API client for live head-to-head moneylines (read-only)."""

from __future__ import annotations

import logging
import time

import httpx

from live_edge.common.http import HttpClient
from live_edge.common.types import dict_items, to_int
from live_edge.config import get_settings
from live_edge.leagues import LeagueConfig
from live_edge.odds.models import OddsBook, OddsQuote

logger = logging.getLogger(__name__)


async def fetch_odds(league: LeagueConfig) -> list[OddsQuote]:
    """Fetch current American moneylines for every listed game in the league."""
    settings = get_settings()
    async with HttpClient(base_url=settings.odds_api_url) as client:
        data = await client.get_json(
            f"/sports/{league.odds_sport}/odds/",
            params={
                "apiKey": settings.odds_api_key,
                "regions": "us",
                "markets": "h2h",
                "oddsFormat": "american",
                "bookmakers": settings.odds_bookmakers,
            },
        )
    if not isinstance(data, list):
        raise ValueError(f"{league.name} odds payload is not a list")
    return parse_odds(data, observed_at=time.time())


def parse_odds(games: list[dict], observed_at: float) -> list[OddsQuote]:
    """Take the first bookmaker offering an h2h market for each game.

    Entries of the wrong shape are skipped.
    """
    quotes: list[OddsQuote] = []
    for game in dict_items(games):
        home_team = game.get("home_team")
        away_team = game.get("away_team")
        if not (isinstance(home_team, str) and isinstance(away_team, str)):
            continue
        if not home_team or not away_team:
            continue
        for book in dict_items(game.get("bookmakers")):
            market = next(
                (m for m in dict_items(book.get("markets")) if m.get("key") == "h2h"), None,
            )
            if market is None:
                continue
            outcomes = {
                o["name"]: o.get("price")
                for o in dict_items(market.get("outcomes"))
                if isinstance(o.get("name"), str)
            }
            if home_team in outcomes and away_team in outcomes:
                home_price = to_int(outcomes[home_team])
                away_price = to_int(outcomes[away_team])
                if home_price and away_price:
                    quotes.append(OddsQuote(
                        away=away_team,
                        home=home_team,
                        away_price=away_price,
                        home_price=home_price,
                        observed_at=observed_at,
                    ))
            break
    return quotes


async def refresh_odds(league: LeagueConfig, book: OddsBook, now: float | None = None) -> bool:
    """Refresh the league's odds book when it is older than the cache lifetime.

    A failed pull keeps the existing cache. Returns True if the book was
    refreshed.
    """
    settings = get_settings()
    now = time.time() if now is None else now
    if not book.is_stale(now, settings.odds_refresh_seconds):
        return False
    if not settings.odds_api_key:
        logger.debug("[%s] No odds API key configured; using default price", league.name)
        return False

    try:
        quotes = await fetch_odds(league)
    except httpx.HTTPStatusError as exc:
        logger.warning("[%s] Odds API HTTP %d, keeping cached odds", league.name, exc.response.status_code)
        return False
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("[%s] Odds refresh failed, keeping cached odds: %s", league.name, exc)
        return False
    except (KeyError, TypeError, AttributeError):
        logger.exception("[%s] Unreadable odds payload, keeping cached odds", league.name)
        return False

    # Re-stamp with the poll time so line-movement windows use one clock
    for quote in quotes:
        quote.observed_at = now
    book.update(quotes, now)
    logger.info("[%s] Odds refreshed: %d game(s)", league.name, len(quotes))
    return True
