import asyncio
from pathlib import Path
import sys

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from collector.exceptions import UpstreamHttpFailure, UpstreamTransportFailure
from collector.upstream import UpstreamFetcher
from config import USER_AGENT


def _fetcher(handler) -> UpstreamFetcher:
    return UpstreamFetcher(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_fetch_sends_identifying_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers.get("user-agent")
        seen["accept"] = request.headers.get("accept")
        return httpx.Response(200, text="2024/01/12 21:00\nCYUL 122100Z 27010KT 15SM FEW030 M02/M08 A3001\n")

    response = asyncio.run(_fetcher(handler).fetch("https://example.test/CYUL.TXT"))

    assert seen == {"ua": USER_AGENT, "accept": "*/*"}
    assert response.ok
    assert response.status_code == 200
    assert "CYUL 122100Z" in response.text()


def test_fetch_returns_error_status_without_raising():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="busy")

    response = asyncio.run(_fetcher(handler).fetch("https://example.test/CYUL.TXT"))

    assert response.status_code == 503
    assert not response.ok
    with pytest.raises(UpstreamHttpFailure) as exc_info:
        response.raise_for_status()
    assert exc_info.value.status_code == 503


def test_fetch_raises_transport_failure_on_connect_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamTransportFailure) as exc_info:
        asyncio.run(_fetcher(handler).fetch("https://example.test/CYUL.TXT"))

    assert exc_info.value.url == "https://example.test/CYUL.TXT"


def test_fetch_raises_transport_failure_on_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(UpstreamTransportFailure):
        asyncio.run(_fetcher(handler).fetch("https://example.test/CYUL.TXT"))
