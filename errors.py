"""Hard-failure exceptions raised while scraping the archive.

Anything raised from here aborts a whole scrape. Running out of results and
per-field extraction problems are not errors and never show up as exceptions.
"""

from __future__ import annotations


class ScrapeError(RuntimeError):
    """Base class for failures that abort a scrape."""


class TransportError(ScrapeError):
    """The page request failed (connection, timeout or HTTP status)."""


class PayloadDecodeError(ScrapeError):
    """The response body was not the expected JSON envelope."""


class QueryError(ScrapeError):
    """The search query could not be turned into a request URL."""
