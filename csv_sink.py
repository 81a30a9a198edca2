"""CSV file sink for scraped tweets."""

from __future__ import annotations

import csv
import logging
import os
from pathlib import Path
from typing import Iterable

from models import Tweet

CSV_OUTPUT_PATH = os.getenv("CSV_OUTPUT_PATH", "tweets.csv")

LOGGER = logging.getLogger(__name__)

CSV_COLUMNS = [
    "tweet_id",
    "handle",
    "timestamp",   # ISO-8601 UTC; empty when the page had no usable time
    "permalink",
    "content",
]


def tweet_already_exists(tweet: Tweet, csv_path: str | None = None) -> bool:
    """Return True if a row with tweet.tweet_id already exists in the CSV."""
    path = Path(csv_path or CSV_OUTPUT_PATH)
    if not path.exists() or not tweet.tweet_id:
        return False

    with path.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            if row.get("tweet_id") == tweet.tweet_id:
                return True
    return False


def write_tweets(tweets: Iterable[Tweet], csv_path: str | None = None) -> int:
    """Append one row per tweet (creating the file with a header if needed).

    Returns the number of rows written.
    """
    path = Path(csv_path or CSV_OUTPUT_PATH)
    write_header = not path.exists() or path.stat().st_size == 0

    written = 0
    with path.open("a", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=CSV_COLUMNS)
        if write_header:
            writer.writeheader()
        for tweet in tweets:
            writer.writerow(tweet_row(tweet))
            written += 1

    LOGGER.info("Wrote %s CSV rows to %s", written, path)
    return written


def tweet_row(tweet: Tweet) -> dict[str, str]:
    return {
        "tweet_id": tweet.tweet_id,
        "handle": tweet.handle,
        "timestamp": tweet.timestamp.isoformat() if tweet.has_timestamp else "",
        "permalink": tweet.permalink,
        "content": tweet.content,
    }
