"""Murmurations index search.

Looks up the index node for a related organization's URL. The index can hold
several nodes for the same ``primary_url`` (re-posted or deleted profiles), so
the lookup prefers the live node whose ``profile_url`` contains the searched
URL and otherwise falls back to the first live node.
"""

from __future__ import annotations

import logging
import re
import urllib.parse
from typing import Any, Dict, List, Optional

import httpx

from .fetcher import DocumentFetcher, FetchError, get_data_from_url
from .http_client import get_index_host

logger = logging.getLogger(__name__)

SCHEMA = "organizations_schema-v1.0.0"

_SCHEME_RE = re.compile(r"^https?://(www\.)?")


class SearchError(RuntimeError):
    """Raised when the index search request does not succeed."""

    def __init__(self, primary_url: str) -> None:
        self.primary_url = primary_url
        super().__init__(f"Failed to query Murmurations API for {primary_url}")


def cleanup_primary_url(primary_url: str) -> str:
    """Strip a leading http(s)://(www.) and a single trailing slash."""
    url = _SCHEME_RE.sub("", primary_url)
    if url.endswith("/"):
        url = url[:-1]
    return url


def build_search_url(primary_url: str, index: str = "test") -> str:
    params = urllib.parse.urlencode({"primary_url": primary_url, "schema": SCHEMA})
    prefix = "test-" if index == "test" else ""
    return f"https://{prefix}{get_index_host()}/v2/nodes?{params}"


def select_node(nodes: List[Dict[str, Any]], primary_url: str) -> Optional[Dict[str, Any]]:
    active = [n for n in nodes if n.get("status") != "deleted"]
    for node in active:
        if primary_url in (node.get("profile_url") or ""):
            return node
    return active[0] if active else None


def search_murmurations_api(
    primary_url: str,
    index: str = "test",
    *,
    fetch_json: Optional[DocumentFetcher] = None,
) -> Optional[Dict[str, Any]]:
    """Find the index node for ``primary_url``.

    Args:
        primary_url: URL of the organization, with or without scheme.
        index: "test" for the test index, anything else for production.
        fetch_json: Optional injectable document fetcher; defaults to get_data_from_url.

    Returns:
        The selected node dict, or None when the index has no live node.
    """
    primary_url = cleanup_primary_url(primary_url)
    _fetch = fetch_json or get_data_from_url

    logger.info("Searching Murmurations %s API for primary URL = %s", index, primary_url)
    try:
        payload = _fetch(build_search_url(primary_url, index))
    except (FetchError, httpx.HTTPError) as exc:
        raise SearchError(primary_url) from exc

    nodes = (payload or {}).get("data") or []
    node = select_node(nodes, primary_url)
    logger.debug("Found murmurations profile: %s", node)
    return node
