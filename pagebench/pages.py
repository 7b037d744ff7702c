from __future__ import annotations

from typing import Any, Callable

import requests

RANDOM_PAGE_URL = "https://www.mediawiki.org/api/rest_v1/page/random/summary"
REQUEST_TIMEOUT_S = 30.0
USER_AGENT = "pagebench/0.1 (concurrency micro-benchmark)"

PageFetcher = Callable[[], Any]


def create_session() -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
    )
    return session


def fetch_random_page(session: requests.Session | None = None) -> dict[str, Any]:
    """Fetch and parse one random page summary.

    Connection errors and non-2xx statuses surface as ``requests`` exceptions,
    a malformed body as ``ValueError``. Nothing is retried.
    """
    if session is None:
        # one connection per fetch; nothing is shared between units
        with create_session() as owned:
            return _get_page(owned)
    return _get_page(session)


def _get_page(session: requests.Session) -> dict[str, Any]:
    response = session.get(RANDOM_PAGE_URL, timeout=REQUEST_TIMEOUT_S)
    response.raise_for_status()
    return response.json()


__all__ = [
    "RANDOM_PAGE_URL",
    "REQUEST_TIMEOUT_S",
    "PageFetcher",
    "create_session",
    "fetch_random_page",
]
