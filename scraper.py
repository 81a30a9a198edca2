"""Cursor-driven pagination over the Twitter archive search.

The archive returns at most ~20 tweets per page and no "has more" flag or
cursor of its own. The next page is requested with a synthetic token built
from tweet ids already seen:

    max_position=TWEET-<last id of previous page>-<first id ever seen>

Pagination ends when a page has no tweets, or when the last tweet of a page
is the very first tweet of the scrape (a single-tweet page would otherwise
request itself forever).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, TextIO

import requests

from diagnostics import InfoSink, as_sink
from models import SearchQuery, Tweet
from search_query import build_search_url, cursor_token
from tweet_extractor import extract_tweets
from twitter_feed import fetch_items_html

LOGGER = logging.getLogger(__name__)

# url -> raw items_html markup
PageFetcher = Callable[[str], str]


@dataclass
class PageCursor:
    """Cursor state for one scrape; never shared between scrapes."""

    floor_id: str | None = None
    cursor_id: str | None = None

    @property
    def token(self) -> str | None:
        if self.cursor_id is None:
            return None
        return cursor_token(self.cursor_id, self.floor_id or "")

    @property
    def exhausted(self) -> bool:
        return self.cursor_id is not None and self.cursor_id == self.floor_id

    def advance(self, batch: list[Tweet]) -> None:
        """Record a non-empty page: floor is set once, cursor every time."""
        if self.floor_id is None:
            self.floor_id = batch[0].tweet_id
        self.cursor_id = batch[-1].tweet_id


class TweetScraper:
    """Scrape every archived tweet matching a search within a date range.

    Args:
        info: Optional stream that receives progress lines ("fetching <url>",
            "<n> tweets processed") and extraction warnings.
        fetch_page: Page transport; defaults to an HTTP GET of the archive.
        session: Optional requests session used by the default transport.
        max_pages: Optional cap on the number of pages fetched per scrape.
    """

    def __init__(
        self,
        info: InfoSink | TextIO | None = None,
        fetch_page: PageFetcher | None = None,
        session: requests.Session | None = None,
        max_pages: int | None = None,
    ) -> None:
        if max_pages is not None and max_pages < 1:
            raise ValueError(f"max_pages must be at least 1, got {max_pages}")
        self.info = as_sink(info)
        self.session = session
        self.max_pages = max_pages
        self._fetch_page = fetch_page or self._http_fetch

    def _http_fetch(self, url: str) -> str:
        return fetch_items_html(url, session=self.session)

    def tweets(self, search: str, start: date, until: date) -> list[Tweet]:
        """Return all tweets found between start and until, in fetch order.

        ``search`` may use the archive's own query operators (e.g.
        ``"#golang from:davecheney"``); it is sent as-is.

        Raises:
            ScrapeError: a page could not be fetched or decoded, or the query
                was malformed. Tweets gathered before the failure are dropped.
        """
        query = SearchQuery(search=search, since=start, until=until)
        cursor = PageCursor()
        collected: list[Tweet] = []
        pages = 0

        while True:
            url = build_search_url(query, token=cursor.token)
            self.info.info("fetching %s", url)
            markup = self._fetch_page(url)
            pages += 1

            batch = extract_tweets(markup, info=self.info)
            if not batch:
                break

            cursor.advance(batch)
            collected.extend(batch)

            if cursor.exhausted:
                break
            if self.max_pages is not None and pages >= self.max_pages:
                LOGGER.warning(
                    "Stopping after max_pages=%s for search=%r (cursor=%s floor=%s)",
                    self.max_pages,
                    search,
                    cursor.cursor_id,
                    cursor.floor_id,
                )
                break

        LOGGER.debug("Scrape complete: search=%r pages=%s tweets=%s", search, pages, len(collected))
        return collected


def fetch_tweets(
    search: str,
    start: date,
    until: date,
    info: InfoSink | TextIO | None = None,
) -> list[Tweet]:
    """Convenience wrapper around ``TweetScraper(info).tweets(...)``."""
    return TweetScraper(info=info).tweets(search, start, until)
