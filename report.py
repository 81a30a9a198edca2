"""Plain-text table rendering for scraped tweets.

Produces the same three-column layout the command line prints:

    Timestamp         Permalink                       Contents
    ----------------  ------------------------------  ------------------------------
    2009-11-10 15:26  duncanmak/status/5602929333     Watching Rob Pike's talk ...
"""

from __future__ import annotations

from typing import Iterable

from models import Tweet
from search_query import PERMALINK_BASE_URL

TIMESTAMP_DISPLAY_FORMAT = "%Y-%m-%d %H:%M"
COLUMN_GAP = "  "

_HEADER = ("Timestamp", "Permalink", "Contents")
_RULE = ("-" * 16, "-" * 30, "-" * 30)


def sort_by_timestamp(tweets: Iterable[Tweet]) -> list[Tweet]:
    """Oldest first; ties keep their scrape order."""
    return sorted(tweets, key=lambda t: t.timestamp)


def render_table(tweets: Iterable[Tweet]) -> str:
    rows = [_HEADER, _RULE]
    rows.extend(_table_row(tweet) for tweet in tweets)

    # Last column is left unpadded.
    widths = [max(len(row[col]) for row in rows) for col in range(len(_HEADER) - 1)]
    lines = []
    for row in rows:
        cells = [cell.ljust(width) for cell, width in zip(row, widths)]
        cells.append(row[-1])
        lines.append(COLUMN_GAP.join(cells).rstrip())
    return "\n".join(lines) + "\n"


def _table_row(tweet: Tweet) -> tuple[str, str, str]:
    stamp = tweet.timestamp.strftime(TIMESTAMP_DISPLAY_FORMAT) if tweet.has_timestamp else ""
    link = tweet.permalink.removeprefix(f"{PERMALINK_BASE_URL}/")
    # Tweets may span lines; keep one tweet per table row.
    content = " ".join(tweet.content.split())
    return (stamp, link, content)
