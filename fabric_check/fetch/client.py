"""
Page Fetcher

Thin wrapper over requests used for product pages and the stock API.
Retries, backoff and caching are left to callers.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import requests

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a request fails before any HTTP status is received."""


@dataclass
class FetchResponse:
    """Status and body of a completed request."""
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Decode the body as JSON (raises ValueError on malformed bodies)."""
        return json.loads(self.text)


class PageFetcher:
    """
    Fetches URLs and returns status plus body text.

    With credentials=True the request goes through the fetcher's
    requests.Session so cookies persist across calls; otherwise a
    one-off request is sent without the session cookie jar.

    Usage:
        fetcher = PageFetcher()
        response = fetcher.fetch(url, credentials=True)
        if response.ok:
            html = response.text
    """

    DEFAULT_TIMEOUT = 20
    DEFAULT_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str | None = None,
        session: requests.Session | None = None,
    ):
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self.user_agent = user_agent or self.DEFAULT_USER_AGENT
        self.session = session or requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def fetch(
        self,
        url: str,
        credentials: bool = False,
        headers: dict[str, str] | None = None,
        accept: str = "text/html",
    ) -> FetchResponse:
        """
        Perform a GET request.

        Args:
            url: Absolute URL
            credentials: Send through the cookie-keeping session
            headers: Extra request headers
            accept: Value of the Accept header

        Returns:
            FetchResponse with status code and body text

        Raises:
            FetchError: On connection errors, timeouts and other transport failures
        """
        request_headers = {
            "User-Agent": self.user_agent,
            "Accept": accept,
        }
        if headers:
            request_headers.update(headers)

        requester = self.session if credentials else requests
        try:
            response = requester.get(url, headers=request_headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning("Request failed for %s: %s", url, e)
            raise FetchError(f"request failed: {e}") from e

        logger.debug("GET %s -> %s", url, response.status_code)
        return FetchResponse(status=response.status_code, text=response.text)
