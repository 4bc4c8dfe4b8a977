"""Application configuration via pydantic-settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Nominal bankroll used to turn a Kelly fraction into a dollar stake
    bankroll: float = 20000.0

    # Seconds between polls of one league
    refresh_interval: float = 30.0

    # Odds cache lifetime in seconds
    odds_refresh_seconds: float = 120.0

    # American price assumed when no live quote matches the game
    default_price: int = -110

    # The Odds API
    odds_api_key: str = ""
    odds_api_url: str = "https://api.the-odds-api.com/v4"
    odds_bookmakers: str = "fanduel,draftkings,betmgm"

    # ESPN site API base URL (scoreboards)
    scoreboard_api_url: str = "https://site.api.espn.com/apis/site/v2/sports/basketball"

    # HTTP request timeout seconds
    http_timeout: float = 15.0

    # SQLite database path for the signal log and engine state
    db_path: Path = Path.home() / ".live-edge" / "engine.db"

    # Star lookup table built by the enrichment job
    stars_path: Path = Path.home() / ".live-edge" / "stars.json"

    # Telegram notifications
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    telegram_enabled: bool = False
    telegram_min_signals: int = 2

    @field_validator("bankroll")
    @classmethod
    def _bankroll_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"bankroll must be > 0, got {v}")
        return v

    @field_validator("refresh_interval", "odds_refresh_seconds", "http_timeout")
    @classmethod
    def _interval_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"intervals must be > 0, got {v}")
        return v

    @field_validator("default_price")
    @classmethod
    def _american_price(cls, v: int) -> int:
        if -100 < v < 100:
            raise ValueError(f"default_price must be an American price (<= -100 or >= 100), got {v}")
        return v


def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
