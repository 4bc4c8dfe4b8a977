"""Telegram Bot API notifications for issued signals and resolutions."""

from __future__ import annotations

import logging

import httpx

from live_edge.common.http import HttpClient
from live_edge.config import get_settings
from live_edge.signals.formatters import (
    format_telegram_scorecard,
    format_telegram_signal,
    format_telegram_summary,
)
from live_edge.signals.models import Signal

logger = logging.getLogger(__name__)

TELEGRAM_API = "https://api.telegram.org"


class TelegramNotifier:
    """Push signal alerts to one Telegram chat.

    Delivery failures are logged and counted, never raised, so a Telegram
    outage cannot abort a poll.
    """

    def __init__(self, bot_token: str | None = None, chat_id: str | None = None) -> None:
        settings = get_settings()
        self.bot_token = bot_token or settings.telegram_bot_token
        self.chat_id = chat_id or settings.telegram_chat_id

    @property
    def configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    async def send(self, texts: list[str], parse_mode: str = "Markdown") -> int:
        """Deliver messages in order over one connection.

        Returns the number of messages delivered.
        """
        if not self.configured:
            logger.debug("Telegram not configured, dropping %d message(s)", len(texts))
            return 0
        if not texts:
            return 0

        delivered = 0
        async with HttpClient(base_url=TELEGRAM_API) as client:
            for text in texts:
                try:
                    await client.post(
                        f"/bot{self.bot_token}/sendMessage",
                        json={"chat_id": self.chat_id, "text": text, "parse_mode": parse_mode},
                    )
                except httpx.HTTPError:
                    logger.warning("Telegram delivery failed", exc_info=True)
                    continue
                delivered += 1
        return delivered

    async def notify(
        self,
        league: str,
        signals: list[Signal],
        min_signals: int | None = None,
    ) -> int:
        """Alert on each signal backed by enough evidence, then summarize the poll.

        Args:
            league: League mode the signals came from.
            signals: Signals issued this poll.
            min_signals: Signal count needed for an individual alert.
                Defaults to settings.telegram_min_signals.
        """
        if not signals:
            return 0
        if min_signals is None:
            min_signals = get_settings().telegram_min_signals

        texts = [format_telegram_signal(s) for s in signals if s.signal_count >= min_signals]
        texts.append(format_telegram_summary(league, signals))
        delivered = await self.send(texts)
        logger.info(
            "Telegram: %d/%d message(s) delivered for %d %s signal(s)",
            delivered, len(texts), len(signals), league.upper(),
        )
        return delivered

    async def notify_resolved(self, resolved: list[Signal]) -> int:
        """Send one scorecard covering freshly resolved signals."""
        if not resolved:
            return 0
        return await self.send([format_telegram_scorecard(resolved)])
