"""Build a Kumu map from a Murmurations organization profile.

The origin profile is always the first element. Each related organization
listed in the origin's ``relationships`` is looked up in the Murmurations
index, fetched, and kept only when its own relationships point back to the
origin. Every kept organization gets one connection to the origin.

Returned schema (JSON-serializable):
{
  "elements": [ {id, label, description, image, location, mission, url, type}, ... ],
  "connections": [ {"from": str, "to": str}, ... ],
  "loops": []
}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .fetcher import DocumentFetcher, get_data_from_url
from .murmurations_search import cleanup_primary_url, search_murmurations_api
from .profile_mapper import profile_to_kumu_element

logger = logging.getLogger(__name__)


class ProfileError(ValueError):
    """Raised when the origin profile cannot anchor a map."""


def _relationship_urls(profile: Dict[str, Any]) -> List[Any]:
    rels = profile.get("relationships") or []
    return [rel.get("object_url") if isinstance(rel, dict) else None for rel in rels]


def has_relationship_to(profile: Dict[str, Any], primary_url: str) -> bool:
    """True if any of the profile's relationships points at ``primary_url``."""
    for object_url in _relationship_urls(profile or {}):
        if isinstance(object_url, str) and primary_url in object_url:
            return True
    return False


def build_connections(elements: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not elements:
        return []
    origin_label = elements[0].get("label")
    return [{"from": el.get("label"), "to": origin_label} for el in elements[1:]]


def _resolve_related(
    rel_url: Any,
    primary_url: str,
    index: str,
    fetch_json: DocumentFetcher,
) -> Optional[Dict[str, Any]]:
    """Return the related profile if it links back to ``primary_url``, else None."""
    if not isinstance(rel_url, str) or not rel_url:
        raise ValueError("relationship has no object_url")

    node = search_murmurations_api(rel_url, index, fetch_json=fetch_json)
    if not node:
        logger.info("No Murmurations node found for %s", rel_url)
        return None
    profile_url = node.get("profile_url")
    if not profile_url:
        raise ValueError("index node has no profile_url")

    profile = fetch_json(profile_url)
    if not has_relationship_to(profile, primary_url):
        logger.debug("Profile %s does not link back to %s", profile_url, primary_url)
        return None
    return profile


def build_kumu_map(
    url: str,
    index: str = "test",
    *,
    fetch_json: Optional[DocumentFetcher] = None,
) -> Dict[str, Any]:
    """Fetch the profile at ``url`` and build its Kumu map.

    Args:
        url: Absolute URL of the origin Murmurations profile.
        index: "test" for the test index, anything else for production.
        fetch_json: Optional injectable document fetcher (url -> JSON) used for
            every outbound request; defaults to get_data_from_url.

    Raises whatever the origin fetch raises, or ProfileError when the origin
    has no primary_url. Failures for individual related profiles are logged
    and skipped.
    """
    _fetch = fetch_json or get_data_from_url

    origin = _fetch(url)
    if not isinstance(origin, dict) or not origin.get("primary_url"):
        raise ProfileError(f"Profile at {url} has no primary_url")
    primary_url = cleanup_primary_url(origin["primary_url"])

    elements = [profile_to_kumu_element(origin)]
    for rel_url in _relationship_urls(origin):
        try:
            related = _resolve_related(rel_url, primary_url, index, _fetch)
        except Exception as exc:
            logger.warning("Skipping related URL %s: %s", rel_url, exc)
            continue
        if related is not None:
            elements.append(profile_to_kumu_element(related))

    return {
        "elements": elements,
        "connections": build_connections(elements),
        "loops": [],
    }
