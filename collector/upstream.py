"""
AviWx Lobby - Upstream Fetcher
Single-shot text retrieval from the NOAA TG-FTP HTTPS mirror.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

import httpx

from config import USER_AGENT, UPSTREAM_TIMEOUT_SECONDS
from collector.exceptions import UpstreamHttpFailure, UpstreamTransportFailure

logger = logging.getLogger("upstream")

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "*/*",
}


class UpstreamResponse:
    """Status plus a lazily decoded body."""

    def __init__(self, status_code: int, reason: str, body: Callable[[], str], url: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.url = url
        self._body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def text(self) -> str:
        return self._body()

    def raise_for_status(self) -> None:
        if not self.ok:
            raise UpstreamHttpFailure(self.status_code, self.reason, self.url)


class UpstreamFetcher:
    """
    Thin wrapper over httpx that always identifies itself.

    Transport errors raise UpstreamTransportFailure; HTTP error statuses are
    returned as-is so the caller can map them. No retries here.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = UPSTREAM_TIMEOUT_SECONDS,
    ):
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def fetch(self, url: str) -> UpstreamResponse:
        try:
            response = await self._client.get(url, headers=DEFAULT_HEADERS)
        except httpx.TransportError as e:
            logger.debug(f"Transport error for {url}: {e!r}")
            raise UpstreamTransportFailure(url, repr(e)) from e

        return UpstreamResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            body=lambda: response.text,
            url=url,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
