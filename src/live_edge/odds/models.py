"""Moneyline quote models and the per-league odds cache."""

from __future__ import annotations

from dataclasses import dataclass, field

from live_edge.common.types import Side

MAX_QUOTE_HISTORY = 50


@dataclass
class OddsQuote:
    """A head-to-head moneyline quote in American odds."""

    away: str  # full team name as the book spells it
    home: str
    away_price: int
    home_price: int
    observed_at: float  # unix seconds

    @property
    def key(self) -> str:
        return matchup_key(self.away, self.home)

    def price(self, side: Side) -> int:
        return self.away_price if side == "away" else self.home_price

    def to_dict(self) -> dict:
        return {
            "away": self.away,
            "home": self.home,
            "away_price": self.away_price,
            "home_price": self.home_price,
            "observed_at": self.observed_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> OddsQuote:
        return cls(
            away=str(data["away"]),
            home=str(data["home"]),
            away_price=int(data["away_price"]),
            home_price=int(data["home_price"]),
            observed_at=float(data["observed_at"]),
        )


def matchup_key(away: str, home: str) -> str:
    return f"{away} vs {home}".lower()


@dataclass
class OddsBook:
    """Latest quotes per matchup plus a capped time series for line movement."""

    quotes: dict[str, OddsQuote] = field(default_factory=dict)
    history: dict[str, list[OddsQuote]] = field(default_factory=dict)
    fetched_at: float = 0.0

    def is_stale(self, now: float, max_age: float) -> bool:
        return not self.quotes or now - self.fetched_at >= max_age

    def update(self, quotes: list[OddsQuote], now: float) -> None:
        """Replace the cache with a fresh pull and extend each matchup's history."""
        self.quotes = {q.key: q for q in quotes}
        self.fetched_at = now
        for quote in quotes:
            series = self.history.setdefault(quote.key, [])
            series.append(quote)
            if len(series) > MAX_QUOTE_HISTORY:
                del series[: len(series) - MAX_QUOTE_HISTORY]

    def history_for(self, key: str) -> list[OddsQuote]:
        return list(self.history.get(key, []))

    def to_dict(self) -> dict:
        return {
            "fetched_at": self.fetched_at,
            "quotes": [q.to_dict() for q in self.quotes.values()],
            "history": {k: [q.to_dict() for q in v] for k, v in self.history.items()},
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> OddsBook:
        data = data or {}
        quotes = [OddsQuote.from_dict(q) for q in data.get("quotes", [])]
        history = {
            str(k): [OddsQuote.from_dict(q) for q in v][-MAX_QUOTE_HISTORY:]
            for k, v in (data.get("history") or {}).items()
        }
        return cls(
            quotes={q.key: q for q in quotes},
            history=history,
            fetched_at=float(data.get("fetched_at", 0.0)),
        )
