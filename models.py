"""Shared typed models for the scraper."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime

# Zero-value timestamp for tweets whose time could not be read or parsed.
ZERO_TIMESTAMP = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class Tweet:
    """One tweet assembled from a page of archive search results."""

    permalink: str = ""
    handle: str = ""
    tweet_id: str = ""
    timestamp: datetime = ZERO_TIMESTAMP
    content: str = ""

    @classmethod
    def placeholder(cls) -> Tweet:
        """Empty tweet that keeps later fragments aligned by position."""
        return cls()

    @property
    def has_timestamp(self) -> bool:
        return self.timestamp != ZERO_TIMESTAMP


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """Search term plus the inclusive date window sent to the archive."""

    search: str
    since: date
    until: date

    def __post_init__(self) -> None:
        # datetime is a date subclass; keep only the calendar day
        if isinstance(self.since, datetime):
            object.__setattr__(self, "since", self.since.date())
        if isinstance(self.until, datetime):
            object.__setattr__(self, "until", self.until.date())

    @property
    def terms(self) -> str:
        """Value of the q parameter: the raw search plus since/until operators."""
        return f"{self.search} since:{self.since.isoformat()} until:{self.until.isoformat()}"
