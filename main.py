"""CLI entrypoint for scraping the Twitter search archive."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date

from dotenv import load_dotenv

from csv_sink import tweet_already_exists, write_tweets
from errors import ScrapeError
from models import Tweet
from report import render_table, sort_by_timestamp
from scraper import TweetScraper


def _iso_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {raw!r}") from exc


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Scrape tweets from the Twitter search archive")
    parser.add_argument(
        "search",
        help="Search term; archive query operators are allowed, e.g. '#golang from:davecheney'",
    )
    parser.add_argument("--since", type=_iso_date, required=True, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--until", type=_iso_date, required=True, help="End date (YYYY-MM-DD)")
    parser.add_argument("--csv", default=None, help="Append results to this CSV file")
    parser.add_argument(
        "--max-pages",
        type=_positive_int,
        # argparse runs string defaults through type, so a bad env value is a usage error
        default=os.getenv("TWITSCRAPE_MAX_PAGES") or None,
        help="Stop after this many pages (default: unlimited)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print fetch progress and extraction warnings to stdout",
    )
    parser.add_argument("--no-table", action="store_true", help="Do not print the results table")
    return parser.parse_args(argv)


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {raw!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {raw!r}")
    return value


def run(
    search: str,
    since: date,
    until: date,
    csv_path: str | None = None,
    max_pages: int | None = None,
    verbose: bool = False,
    show_table: bool = True,
) -> int:
    """Scrape, sort and emit one search. Returns the number of tweets found."""
    scraper = TweetScraper(info=sys.stdout if verbose else None, max_pages=max_pages)
    tweets = scraper.tweets(search, since, until)
    logging.info("Scraped %s tweets for search=%r (%s..%s)", len(tweets), search, since, until)

    tweets = sort_by_timestamp(tweets)
    if show_table:
        sys.stdout.write(render_table(tweets))
    if csv_path:
        new_tweets = _unwritten(tweets, csv_path)
        logging.info(
            "CSV dedup: %s new tweets (skipped %s already in %s)",
            len(new_tweets),
            len(tweets) - len(new_tweets),
            csv_path,
        )
        write_tweets(new_tweets, csv_path=csv_path)
    return len(tweets)


def _unwritten(tweets: list[Tweet], csv_path: str) -> list[Tweet]:
    """Drop tweets whose id is already in the CSV or earlier in this batch.

    Placeholders have no id and are always kept.
    """
    seen: set[str] = set()
    fresh: list[Tweet] = []
    for tweet in tweets:
        if tweet.tweet_id and (tweet.tweet_id in seen or tweet_already_exists(tweet, csv_path=csv_path)):
            continue
        if tweet.tweet_id:
            seen.add(tweet.tweet_id)
        fresh.append(tweet)
    return fresh


def main(argv: list[str] | None = None) -> int:
    """Initialize config and execute one scrape."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args(argv)

    try:
        run(
            search=args.search,
            since=args.since,
            until=args.until,
            csv_path=args.csv,
            max_pages=args.max_pages,
            verbose=args.verbose,
            show_table=not args.no_table,
        )
    except ScrapeError as exc:
        logging.error("Scrape failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
