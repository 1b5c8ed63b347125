import os
from typing import Optional

import httpx

_client: Optional[httpx.Client] = None
_env_loaded = False

_DEFAULT_TIMEOUT = 10.0
_DEFAULT_USER_AGENT = "murmurations-kumu/0.1"
_DEFAULT_INDEX_HOST = "index.murmurations.network"
_DEFAULT_INDEX = "test"


def get_client() -> httpx.Client:
    """Return the shared httpx client, creating it on first use."""
    global _client
    if _client is None:
        timeout, user_agent = _get_http_config()
        _client = httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            follow_redirects=True,
        )
    return _client


def close_client():
    global _client
    if _client is not None:
        _client.close()
        _client = None


def _load_env_from_file():
    """Load environment variables from a .env file at the project root if present.

    Only sets variables that aren't already present in the process environment.
    The file is read once per process.
    """
    global _env_loaded
    if _env_loaded:
        return
    _env_loaded = True
    try:
        root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
        env_path = os.path.join(root_dir, ".env")
        if not os.path.isfile(env_path):
            return
        with open(env_path, "r", encoding="utf-8") as f:
            for line in f:
                s = line.strip()
                if not s or s.startswith("#"):
                    continue
                if "=" not in s:
                    continue
                key, val = s.split("=", 1)
                key = key.strip()
                val = val.strip().strip('"').strip("'")
                if key and (key not in os.environ or not os.environ[key]):
                    os.environ[key] = val
    except OSError:
        # .env loading is best-effort
        pass


def _get_http_config():
    """Return (timeout, user_agent) for outbound requests."""
    _load_env_from_file()

    raw_timeout = os.getenv("MURMURATIONS_HTTP_TIMEOUT")
    try:
        timeout = float(raw_timeout) if raw_timeout else _DEFAULT_TIMEOUT
    except ValueError:
        raise RuntimeError(
            f"MURMURATIONS_HTTP_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
        ) from None
    user_agent = os.getenv("MURMURATIONS_USER_AGENT") or _DEFAULT_USER_AGENT
    return timeout, user_agent


def get_index_host() -> str:
    _load_env_from_file()
    return os.getenv("MURMURATIONS_INDEX_HOST") or _DEFAULT_INDEX_HOST


def get_default_index() -> str:
    _load_env_from_file()
    return os.getenv("MURMURATIONS_DEFAULT_INDEX") or _DEFAULT_INDEX
