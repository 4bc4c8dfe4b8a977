"""Async HTTP client shared by the scoreboard, odds and Telegram adapters."""

from __future__ import annotations

import logging

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from live_edge.config import get_settings

logger = logging.getLogger(__name__)

RETRY_STATUS = frozenset({429, 500, 502, 503, 504})


def _should_retry(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRY_STATUS
    return isinstance(exc, (httpx.TimeoutException, httpx.RemoteProtocolError))


class HttpClient:
    """Thin httpx wrapper: explicit timeout, raise on error status, 3 tries."""

    def __init__(
        self,
        base_url: str = "",
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        if timeout is None:
            timeout = get_settings().http_timeout
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers or {},
            timeout=httpx.Timeout(timeout),
        )

    @retry(
        retry=retry_if_exception(_should_retry),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def request(self, method: str, url: str, **kwargs: object) -> httpx.Response:
        resp = await self._client.request(method, url, **kwargs)
        resp.raise_for_status()
        return resp

    async def get_json(self, url: str, params: dict | None = None) -> object:
        """GET and decode a JSON body. Raises ValueError on malformed JSON."""
        resp = await self.request("GET", url, params=params)
        return resp.json()

    async def post(self, url: str, json: dict | None = None) -> httpx.Response:
        return await self.request("POST", url, json=json)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
