import urllib.parse

import pytest

from murmurations_kumu.services.fetcher import FetchError


class FakeFetcher:
    """Stand-in for get_data_from_url.

    profiles: url -> profile dict (or an exception instance to raise)
    index: normalized primary_url -> list of index nodes (or an exception instance)
    """

    def __init__(self, profiles=None, index=None):
        self.profiles = profiles or {}
        self.index = index or {}
        self.calls = []

    def __call__(self, url: str):
        self.calls.append(url)
        parsed = urllib.parse.urlparse(url)
        if parsed.netloc.endswith("index.murmurations.network"):
            query = urllib.parse.parse_qs(parsed.query)
            result = self.index.get(query["primary_url"][0], [])
        else:
            if url not in self.profiles:
                raise FetchError(url, 404, "Not Found")
            result = self.profiles[url]
        if isinstance(result, Exception):
            raise result
        if parsed.netloc.endswith("index.murmurations.network"):
            return {"data": result}
        return result

    @property
    def search_calls(self):
        return [u for u in self.calls if "index.murmurations.network" in u]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "MURMURATIONS_INDEX_HOST",
        "MURMURATIONS_DEFAULT_INDEX",
        "MURMURATIONS_HTTP_TIMEOUT",
        "MURMURATIONS_USER_AGENT",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


def org_profile(name, primary_url, related=(), **extra):
    profile = {
        "id": f"id-{name.lower()}",
        "name": name,
        "description": f"{name} description",
        "image": f"https://{primary_url}/logo.png",
        "full_address": f"1 {name} Street",
        "mission": f"{name} mission",
        "primary_url": f"https://{primary_url}",
        "relationships": [{"predicate_url": "https://schema.org/member", "object_url": u} for u in related],
    }
    profile.update(extra)
    return profile


@pytest.fixture
def make_profile():
    return org_profile
