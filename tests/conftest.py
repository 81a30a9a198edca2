"""Offline archive markup builders shared by the test modules."""

from __future__ import annotations

from typing import Callable

import pytest

TWEET_CLASSES = (
    "tweet js-stream-tweet js-actionable-tweet js-profile-popup-actionable "
    "original-tweet js-original-tweet"
)

# The first #golang tweets, newest first, as the archive returned them for
# 2009-11-10..2009-11-11. Only the last (oldest) entry is the real tweet;
# the others are stand-ins with the right shape.
GOLANG_LAST = (
    "duncanmak",
    "5602929333",
    "3:26 PM - 10 Nov 2009",
    "Watching Rob Pike's talk on Google's new #golang language. "
    "A lot of his points remind me of ML systems, I wonder what's new?",
)


def tweet_html(
    handle: str | None,
    tweet_id: str | None,
    title: str | None = "3:26 PM - 10 Nov 2009",
    text: str | None = "hello #golang",
    permalink: str | None = None,
) -> str:
    """One stream item as the archive renders it.

    Passing None drops the matching fragment or attribute.
    """
    if permalink is None and handle is not None and tweet_id is not None:
        permalink = f"/{handle}/status/{tweet_id}"
    permalink_attr = f' data-permalink-path="{permalink}"' if permalink is not None else ""

    timestamp = ""
    if title is not None:
        timestamp = (
            f'<small class="time"><a href="{permalink or ""}" '
            f'class="tweet-timestamp js-permalink js-nav js-tooltip" title="{title}">'
            f'<span class="_timestamp js-short-timestamp">10 Nov 2009</span></a></small>'
        )

    body = ""
    if text is not None:
        body = (
            '<div class="js-tweet-text-container">\n'
            f'  <p class="TweetTextSize js-tweet-text tweet-text" lang="en">{text}</p>\n'
            "</div>"
        )

    return (
        '<li class="js-stream-item stream-item stream-item">'
        f'<div class="{TWEET_CLASSES}"{permalink_attr} data-tweet-id="{tweet_id or ""}">'
        f'<div class="content"><div class="stream-item-header">{timestamp}</div>{body}</div>'
        "</div></li>"
    )


def page_html(items: list[str]) -> str:
    return "\n".join(items)


def golang_page() -> str:
    """Eighteen tweets ending with duncanmak's 5602929333."""
    items = [
        tweet_html(f"gopher{i}", str(5603770675 - i * 1000), "4:0%d PM - 10 Nov 2009" % (i % 10))
        for i in range(17)
    ]
    handle, tweet_id, title, text = GOLANG_LAST
    items.append(tweet_html(handle, tweet_id, title, text))
    return page_html(items)


@pytest.fixture
def make_tweet() -> Callable[..., str]:
    return tweet_html


@pytest.fixture
def make_page() -> Callable[[list[str]], str]:
    return page_html


@pytest.fixture
def golang_markup() -> str:
    return golang_page()
