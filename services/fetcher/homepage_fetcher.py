# services/fetcher/homepage_fetcher.py
"""
Downloads the homepage HTML that the extraction pipeline works on.

Transport errors and 5xx answers are retried with exponential backoff;
whatever still fails surfaces as a single ``FetchError``.
"""

from typing import Dict, Optional

import httpx
from loguru import logger
from prometheus_client import Histogram
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from core.config import Settings, get_settings
from core.exceptions import FetchError

FETCH_DURATION = Histogram('homepage_fetch_duration_seconds', 'Time spent fetching the homepage')


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return False


class HomepageFetcher:
    """Thin async wrapper around ``httpx`` for the one page we scrape."""

    def __init__(
        self,
        config: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or get_settings()
        # ``transport`` lets tests plug in ``httpx.MockTransport``
        self._transport = transport

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.config.DEFAULT_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
            "Connection": "keep-alive",
        }

    async def _get(self, client: httpx.AsyncClient, url: str) -> str:
        response = await client.get(url)
        response.raise_for_status()
        return response.text

    async def fetch(self, url: Optional[str] = None) -> str:
        """Return the HTML text of ``url`` (defaults to the homepage)."""
        url = url or self.config.HOMEPAGE_URL
        logger.info(f"Fetching {url}")

        try:
            with FETCH_DURATION.time():
                async with httpx.AsyncClient(
                    headers=self.headers,
                    timeout=self.config.FETCH_TIMEOUT,
                    follow_redirects=True,
                    transport=self._transport,
                ) as client:
                    async for attempt in AsyncRetrying(
                        stop=stop_after_attempt(self.config.FETCH_RETRIES),
                        wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
                        retry=retry_if_exception(_is_retryable),
                        before_sleep=lambda rs: logger.warning(
                            f"Fetch attempt {rs.attempt_number} for {url} failed: "
                            f"{rs.outcome.exception()}"
                        ),
                        reraise=True,
                    ):
                        with attempt:
                            html = await self._get(client, url)
        except RetryError as exc:  # pragma: no cover – reraise=True makes this rare
            raise FetchError(str(exc)) from exc
        except httpx.HTTPStatusError as exc:
            logger.error(f"Upstream returned {exc.response.status_code} for {url}")
            raise FetchError(f"Upstream responded with HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error(f"Fetching {url} failed: {exc}")
            raise FetchError(f"{type(exc).__name__}: {exc}") from exc

        if not isinstance(html, str) or not html.strip():
            raise FetchError("Invalid response data received")
        return html
