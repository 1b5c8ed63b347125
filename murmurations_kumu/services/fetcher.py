"""Fetch JSON documents from arbitrary URLs.

Every outbound GET in this service goes through ``get_data_from_url`` so that
callers (and tests) can swap it for any callable with the same shape:
``(url) -> parsed JSON``.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx

from .http_client import get_client


DocumentFetcher = Callable[[str], Any]


class FetchError(RuntimeError):
    """Raised when an upstream GET returns a non-success status."""

    def __init__(self, url: str, status_code: int, reason: str) -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


def get_data_from_url(url: str, *, client: Optional[httpx.Client] = None) -> Any:
    """GET ``url`` and return the decoded JSON body.

    Raises:
        FetchError: the response status is not 2xx.
        httpx.HTTPError: network level failures (DNS, timeouts, ...).
        ValueError: the body is not valid JSON.
    """
    http = client or get_client()
    resp = http.get(url)
    if not resp.is_success:
        raise FetchError(url, resp.status_code, resp.reason_phrase)
    return resp.json()
