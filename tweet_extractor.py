"""Reconstruct tweets from one page of archive search markup.

The page exposes three unrelated sets of fragments: the tweet containers,
the timestamp links and the text containers. Nothing links a timestamp or a
text block to its tweet except document order, so extraction runs three
passes over the same document and pairs fragments by index:

1. identity  - fixes the number of tweets N for the page
2. timestamp - fills ``timestamp`` for indexes below N
3. content   - fills ``content`` for indexes below N

Surplus or missing fragments in passes 2 and 3 leave fields empty and are
reported as warnings; they never shift or drop tweets.
"""

from __future__ import annotations

import re
from dataclasses import asdict
from datetime import UTC, datetime
from typing import Any

from bs4 import BeautifulSoup

from diagnostics import InfoSink, as_sink
from models import ZERO_TIMESTAMP, Tweet
from search_query import PERMALINK_BASE_URL

TWEET_SELECTOR = (
    ".tweet.js-stream-tweet.js-actionable-tweet.js-profile-popup-actionable"
    ".original-tweet.js-original-tweet"
)
TIMESTAMP_SELECTOR = ".tweet-timestamp.js-permalink.js-nav.js-tooltip"
CONTENT_SELECTOR = ".js-tweet-text-container"

# Title attribute of the timestamp link, e.g. "3:26 PM - 10 Nov 2009".
# Parsed by hand: strptime's %p and %b follow LC_TIME, the archive is always English.
TIMESTAMP_PATTERN = re.compile(
    r"^(?P<hour>\d{1,2}):(?P<minute>\d{2}) (?P<ampm>AM|PM) - "
    r"(?P<day>\d{1,2}) (?P<month>[A-Z][a-z]{2}) (?P<year>\d{4})$"
)
_MONTHS = {
    name: number
    for number, name in enumerate(
        ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
        start=1,
    )
}

# '/<handle>/status/<id>' splits into ['', handle, 'status', id]
_MIN_PERMALINK_PARTS = 4


def extract_tweets(markup: str, info: InfoSink | None = None) -> list[Tweet]:
    """Return the tweets on one page in document order.

    An empty list means the page had no tweet containers, i.e. the archive
    has nothing more for this query.
    """
    sink = as_sink(info)
    soup = BeautifulSoup(markup, "lxml")

    # Identity pass must run first: it creates the drafts the others fill in.
    drafts = _identity_pass(soup, sink)
    if not drafts:
        return []

    _timestamp_pass(soup, drafts, sink)
    _content_pass(soup, drafts, sink)

    tweets = [Tweet(**draft) for draft in drafts]
    sink.info("%d tweets processed", len(tweets))
    return tweets


def _identity_pass(soup: BeautifulSoup, sink: InfoSink) -> list[dict[str, Any]]:
    drafts: list[dict[str, Any]] = []
    for i, node in enumerate(soup.select(TWEET_SELECTOR)):
        path = node.get("data-permalink-path")
        if not path:
            sink.warning("tweet %d: could not get permalink", i)
            drafts.append(_empty_draft())
            continue

        parts = path.split("/")
        if len(parts) < _MIN_PERMALINK_PARTS:
            sink.warning("tweet %d: permalink %s was not in correct format", i, path)
            drafts.append(_empty_draft())
            continue

        draft = _empty_draft()
        draft["permalink"] = f"{PERMALINK_BASE_URL}{path}"
        draft["handle"] = parts[1]
        draft["tweet_id"] = parts[3]
        drafts.append(draft)
    return drafts


def _timestamp_pass(soup: BeautifulSoup, drafts: list[dict[str, Any]], sink: InfoSink) -> None:
    for i, node in enumerate(soup.select(TIMESTAMP_SELECTOR)):
        if i >= len(drafts):
            sink.warning("timestamp: found %d timestamps, only %d tweets exist", i + 1, len(drafts))
            continue

        title = node.get("title")
        if title is None:
            sink.warning("tweet %d: could not get timestamp", i)
            continue

        drafts[i]["timestamp"] = parse_timestamp(title, index=i, sink=sink)


def _content_pass(soup: BeautifulSoup, drafts: list[dict[str, Any]], sink: InfoSink) -> None:
    for i, node in enumerate(soup.select(CONTENT_SELECTOR)):
        if i >= len(drafts):
            sink.warning("text: found %d contents, only %d tweets exist", i + 1, len(drafts))
            continue

        text = node.get_text().strip()
        if not text:
            sink.warning("tweet %d: contents were empty", i)
            continue

        drafts[i]["content"] = text


def parse_timestamp(raw: str, index: int = 0, sink: InfoSink | None = None) -> datetime:
    """Parse a timestamp title as UTC, falling back to ZERO_TIMESTAMP."""
    try:
        return _parse_title(raw.strip())
    except ValueError:
        as_sink(sink).warning("tweet %d: timestamp: could not parse time %s", index, raw)
        return ZERO_TIMESTAMP


def _parse_title(title: str) -> datetime:
    match = TIMESTAMP_PATTERN.match(title)
    if match is None or match["month"] not in _MONTHS:
        raise ValueError(f"unrecognised timestamp {title!r}")

    hour = int(match["hour"])
    if not 1 <= hour <= 12:
        raise ValueError(f"hour out of range in {title!r}")
    # 12 AM is midnight, 12 PM is noon
    hour = hour % 12 + (12 if match["ampm"] == "PM" else 0)

    return datetime(
        int(match["year"]),
        _MONTHS[match["month"]],
        int(match["day"]),
        hour,
        int(match["minute"]),
        tzinfo=UTC,
    )


def _empty_draft() -> dict[str, Any]:
    return asdict(Tweet.placeholder())
