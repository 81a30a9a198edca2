"""Archive search URL and pagination cursor helpers."""

from __future__ import annotations

import os
from urllib.parse import quote, urlencode

from errors import QueryError
from models import SearchQuery

TWITTER_SEARCH_URL = os.getenv("TWITSCRAPE_SEARCH_URL", "https://twitter.com/i/search/timeline")
PERMALINK_BASE_URL = "https://www.twitter.com"

# Fixed parameters the archive's own search form sends.
_STATIC_PARAMS: dict[str, str] = {
    "f": "tweets",
    "src": "typd",
    "vertical": "default",
}


def cursor_token(cursor_id: str, floor_id: str) -> str:
    """Return the max_position value asking for tweets after cursor_id."""
    return f"TWEET-{cursor_id}-{floor_id}"


def build_search_url(query: SearchQuery, token: str | None = None) -> str:
    """Build the timeline search URL for one page.

    Parameters are sorted by key and every value is fully percent-encoded
    (spaces as %20, '#' as %23, ':' as %3A). The first page of a scrape has no
    token and therefore no max_position parameter.
    """
    validate_query(query)

    params = dict(_STATIC_PARAMS)
    params["q"] = query.terms
    if token:
        params["max_position"] = token

    encoded = urlencode(sorted(params.items()), quote_via=quote, safe="")
    return f"{TWITTER_SEARCH_URL}?{encoded}"


def validate_query(query: SearchQuery) -> None:
    if not query.search or not query.search.strip():
        raise QueryError("search term must not be empty")
    if query.since > query.until:
        raise QueryError(
            f"since date {query.since.isoformat()} is after until date {query.until.isoformat()}"
        )
