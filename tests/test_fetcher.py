# tests/test_fetcher.py
import asyncio

import httpx
import pytest

from core.config import Settings
from core.exceptions import FetchError
from services.fetcher import HomepageFetcher

URL = "https://odia.krishijagran.com"


def _fetcher(handler, retries: int = 1) -> HomepageFetcher:
    config = Settings(FETCH_RETRIES=retries, HOMEPAGE_URL=URL)
    return HomepageFetcher(config=config, transport=httpx.MockTransport(handler))


def test_fetch_returns_html_and_sends_browser_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers["user-agent"]
        seen["url"] = str(request.url)
        return httpx.Response(200, text="<html><body>ok</body></html>")

    html = asyncio.run(_fetcher(handler).fetch())

    assert "ok" in html
    assert seen["url"].startswith(URL)
    assert seen["ua"].startswith("Mozilla/5.0")


def test_server_error_is_retried():
    calls = []

    def handler(request):
        calls.append(1)
        if len(calls) == 1:
            return httpx.Response(503, text="busy")
        return httpx.Response(200, text="<html>second try</html>")

    html = asyncio.run(_fetcher(handler, retries=2).fetch())
    assert "second try" in html
    assert len(calls) == 2


def test_client_error_is_not_retried():
    calls = []

    def handler(request):
        calls.append(1)
        return httpx.Response(404, text="gone")

    with pytest.raises(FetchError) as exc_info:
        asyncio.run(_fetcher(handler, retries=3).fetch())

    assert len(calls) == 1
    assert "404" in exc_info.value.error
    assert exc_info.value.status_code == 502


def test_transport_error_becomes_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError) as exc_info:
        asyncio.run(_fetcher(handler).fetch())
    assert "ConnectError" in exc_info.value.error


def test_empty_body_is_rejected():
    def handler(request):
        return httpx.Response(200, text="   ")

    with pytest.raises(FetchError) as exc_info:
        asyncio.run(_fetcher(handler).fetch())
    assert exc_info.value.error == "Invalid response data received"
