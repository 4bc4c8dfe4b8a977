"""Tests for The Odds API client and the odds cache."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from live_edge.leagues import NBA
from live_edge.odds.client import parse_odds, refresh_odds
from live_edge.odds.models import MAX_QUOTE_HISTORY, OddsBook, OddsQuote

ODDS_RESPONSE = [
    {
        "home_team": "Boston Celtics",
        "away_team": "Los Angeles Lakers",
        "bookmakers": [
            {"key": "fanduel", "markets": [{"key": "spreads", "outcomes": []}]},
            {
                "key": "draftkings",
                "markets": [{
                    "key": "h2h",
                    "outcomes": [
                        {"name": "Boston Celtics", "price": -180},
                        {"name": "Los Angeles Lakers", "price": 155},
                    ],
                }],
            },
            {
                "key": "betmgm",
                "markets": [{
                    "key": "h2h",
                    "outcomes": [
                        {"name": "Boston Celtics", "price": -175},
                        {"name": "Los Angeles Lakers", "price": 150},
                    ],
                }],
            },
        ],
    },
    {"home_team": "", "away_team": "Miami Heat", "bookmakers": []},
]


def _settings():
    settings = MagicMock()
    settings.odds_refresh_seconds = 120.0
    settings.odds_api_key = "test-key"
    return settings


def _quote(price: int, observed_at: float) -> OddsQuote:
    return OddsQuote("Los Angeles Lakers", "Boston Celtics", price, -price, observed_at)


class TestParseOdds:
    def test_first_bookmaker_with_h2h(self):
        quotes = parse_odds(ODDS_RESPONSE, observed_at=100.0)
        assert len(quotes) == 1
        quote = quotes[0]
        assert quote.away_price == 155
        assert quote.home_price == -180
        assert quote.price("home") == -180
        assert quote.key == "los angeles lakers vs boston celtics"

    def test_non_object_entries_skipped(self):
        games = [
            None,
            {"home_team": "A", "away_team": "B", "bookmakers": ["x"]},
            {"home_team": "A", "away_team": "B", "bookmakers": [
                {"markets": [7, {"key": "h2h", "outcomes": [None, {"name": ["A"]}]}]},
            ]},
            {"home_team": ["A"], "away_team": "B", "bookmakers": []},
        ]
        assert parse_odds(games, observed_at=1.0) == []

    def test_empty(self):
        assert parse_odds([], observed_at=0.0) == []


class TestOddsBook:
    def test_stale_when_empty(self):
        assert OddsBook().is_stale(now=0.0, max_age=120)

    def test_fresh_within_max_age(self):
        book = OddsBook()
        book.update([_quote(150, 1000.0)], 1000.0)
        assert not book.is_stale(now=1100.0, max_age=120)
        assert book.is_stale(now=1120.0, max_age=120)

    def test_history_capped(self):
        book = OddsBook()
        for i in range(MAX_QUOTE_HISTORY + 10):
            book.update([_quote(100 + i, float(i))], float(i))
        history = book.history_for("los angeles lakers vs boston celtics")
        assert len(history) == MAX_QUOTE_HISTORY
        assert history[-1].away_price == 100 + MAX_QUOTE_HISTORY + 9

    def test_serialization(self):
        book = OddsBook()
        book.update([_quote(150, 1000.0)], 1000.0)
        restored = OddsBook.from_dict(book.to_dict())
        assert restored.fetched_at == 1000.0
        assert restored.quotes == book.quotes
        assert restored.history == book.history


class TestRefreshOdds:
    @pytest.fixture(autouse=True)
    def settings(self):
        settings = _settings()
        with patch("live_edge.odds.client.get_settings", return_value=settings):
            yield settings

    @pytest.mark.asyncio
    async def test_refreshes_stale_book(self):
        book = OddsBook()
        mock_fetch = AsyncMock(return_value=[_quote(150, 1.0)])
        with patch("live_edge.odds.client.fetch_odds", mock_fetch):
            assert await refresh_odds(NBA, book, now=5000.0)

        assert book.fetched_at == 5000.0
        # Re-stamped with the poll time
        assert next(iter(book.quotes.values())).observed_at == 5000.0

    @pytest.mark.asyncio
    async def test_fresh_book_not_refetched(self):
        book = OddsBook()
        book.update([_quote(150, 5000.0)], 5000.0)
        mock_fetch = AsyncMock()
        with patch("live_edge.odds.client.fetch_odds", mock_fetch):
            assert not await refresh_odds(NBA, book, now=5060.0)
        mock_fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_api_key(self, settings):
        settings.odds_api_key = ""
        mock_fetch = AsyncMock()
        with patch("live_edge.odds.client.fetch_odds", mock_fetch):
            assert not await refresh_odds(NBA, OddsBook(), now=5000.0)
        mock_fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_keeps_cache(self):
        book = OddsBook()
        book.update([_quote(150, 1000.0)], 1000.0)
        mock_fetch = AsyncMock(side_effect=httpx.ConnectError("down"))
        with patch("live_edge.odds.client.fetch_odds", mock_fetch):
            assert not await refresh_odds(NBA, book, now=5000.0)

        assert book.fetched_at == 1000.0
        assert len(book.quotes) == 1

    @pytest.mark.asyncio
    async def test_http_status_error_keeps_cache(self):
        request = httpx.Request("GET", "https://api.the-odds-api.com/v4/sports")
        response = httpx.Response(401, request=request)
        error = httpx.HTTPStatusError("unauthorized", request=request, response=response)
        book = OddsBook()
        with patch("live_edge.odds.client.fetch_odds", AsyncMock(side_effect=error)):
            assert not await refresh_odds(NBA, book, now=5000.0)
        assert book.quotes == {}

    @pytest.mark.asyncio
    async def test_unreadable_payload_keeps_cache(self):
        book = OddsBook()
        book.update([_quote(150, 1000.0)], 1000.0)
        mock_fetch = AsyncMock(side_effect=AttributeError("'str' object has no attribute 'get'"))
        with patch("live_edge.odds.client.fetch_odds", mock_fetch):
            assert not await refresh_odds(NBA, book, now=5000.0)

        assert book.fetched_at == 1000.0
        assert len(book.quotes) == 1
